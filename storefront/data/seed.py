# storefront/data/seed.py
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.database import SessionLocal, init_db, run_in_transaction
from storefront.data.models import ProductModel, UserModel
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

USERS = [
    {"id": 1, "name": "Demo Seller"},
    {"id": 2, "name": "Demo Customer"},
]

PRODUCTS = [
    {"name": "Keyboard", "price": Decimal("199.99"), "stock": 25},
    {"name": "Mouse", "price": Decimal("49.50"), "stock": 100},
    {"name": "Monitor", "price": Decimal("899.00"), "stock": 5},
]


def seed(db: Session) -> bool:
    # not forcing: only seed if empty
    if db.execute(select(ProductModel.id).limit(1)).first():
        return False

    def _insert(db: Session):
        users = UserRepo(db)
        products = ProductRepo(db)
        for u in USERS:
            if not users.get_user(u["id"]):
                users.create_user(UserModel(**u))
        for p in PRODUCTS:
            products.create(ProductModel(seller_id=USERS[0]["id"], **p))

    run_in_transaction(db, _insert)
    logger.info(f"Seeded {len(USERS)} users and {len(PRODUCTS)} products")
    return True


if __name__ == "__main__":
    init_db()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()
