# storefront/services/cart_service.py
from decimal import Decimal
from typing import Dict, Any
from sqlalchemy.orm import Session
from storefront.data.database import run_in_transaction
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import (
    CartLineNotFound,
    CartNotFound,
    InvalidQuantity,
    ProductNotFound,
    UserNotFound,
)
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

class CartService:
    """
    Komendy (add, update, remove) i query (get) dla koszyka usera.
    Koszyk nie rusza stanow magazynowych - to robi dopiero checkout.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)

    #query - odczyt
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self.repo.get_cart_by_user(user_id)

        if not cart:
            raise CartNotFound(user_id)

        items = []
        total = Decimal("0.00")
        for line in self.repo.get_lines(cart.id):
            #cena biezaca z katalogu, tylko informacyjnie
            product = self.products.get_by_id(line.product_id)
            unit_price = product.price if product is not None else None
            if unit_price is not None:
                total += unit_price * line.quantity
            items.append(
                {
                    "id": line.id,
                    "product_id": line.product_id,
                    "quantity": line.quantity,
                    "unit_price": unit_price,
                }
            )

        return {
            "cart_id": cart.id,
            "user_id": cart.user_id,
            "items": items,
            "total": total,
        }

    #commands
    def add_product(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise InvalidQuantity(quantity)

        def _add(db: Session):
            if not self.users.get_user(user_id):
                raise UserNotFound(user_id)

            if not self.products.get_by_id(product_id):
                raise ProductNotFound(product_id)

            #koszyk tworzony leniwie przy pierwszym dodaniu
            cart = self.repo.get_or_create_cart(user_id)

            item = self.repo.add_or_increment_line(cart.id, product_id, quantity)
            logger.info(
                f"Produkt {product_id} w koszyku {cart.id}, ilosc po dodaniu: {item.quantity}"
            )

        run_in_transaction(self.db, _add)
        return self.get_cart(user_id)

    def update_quantity(self, user_id: int, item_id: int, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise InvalidQuantity(quantity)

        def _update(db: Session):
            item = self._get_own_line(user_id, item_id)
            item.quantity = quantity
            self.repo.add_line(item)

        run_in_transaction(self.db, _update)
        logger.info(f"Pozycja {item_id} usera {user_id} ma teraz ilosc {quantity}")
        return self.get_cart(user_id)

    def remove_item(self, user_id: int, item_id: int) -> Dict[str, Any]:
        def _remove(db: Session):
            self.repo.delete_line(self._get_own_line(user_id, item_id))

        run_in_transaction(self.db, _remove)
        logger.info(f"Pozycja {item_id} usunieta z koszyka usera {user_id}")
        return self.get_cart(user_id)

    def _get_own_line(self, user_id: int, item_id: int) -> CartItemModel:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            raise CartNotFound(user_id)

        #pozycja musi nalezec do koszyka tego usera
        item = self.repo.get_line_by_id(cart.id, item_id)
        if not item:
            raise CartLineNotFound(item_id)
        return item
