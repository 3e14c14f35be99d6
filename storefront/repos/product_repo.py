# storefront/repos/product_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, product_id: int, for_update: bool = False) -> ProductModel | None:
        stmt = select(ProductModel).where(ProductModel.id == product_id)
        if for_update:
            # SELECT ... FOR UPDATE, wiersz zablokowany do konca transakcji
            # populate_existing zeby nie dostac starej kopii z identity map
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.db.execute(stmt).scalar_one_or_none()

    def conditional_decrement_stock(self, product_id: int, quantity: int) -> int:
        """
        UPDATE products SET stock = stock - :q WHERE id = :id AND stock >= :q

        Zwraca liczbe zmienionych wierszy: 1 gdy stan wystarczyl, 0 gdy nie
        (albo produkt zniknal). Sprawdzenie i zapis to jedna instrukcja.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.stock >= quantity,
            )
            .values(stock=ProductModel.stock - quantity)
            # obiekty w sesji odswieza populate_existing przy kolejnym odczycie FOR UPDATE
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def create(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product
