# storefront/repos/cart_repo.py
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel


class CartRepo:
    """Dostep do koszykow i ich pozycji. Nie commituje - transakcja nalezy do serwisu."""

    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_cart_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def get_or_create_cart(self, user_id: int) -> CartModel:
        cart = self.get_cart_by_user(user_id)
        if cart:
            return cart

        #unique na user_id, rownolegly request mogl juz utworzyc koszyk
        try:
            with self.db.begin_nested():
                cart = CartModel(user_id=user_id)
                self.db.add(cart)
                self.db.flush()
        except IntegrityError:
            cart = self.get_cart_by_user(user_id)
            if cart is None:
                raise
        return cart

    def get_lines(self, cart_id: int) -> List[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.id)
            ).scalars().all()
        )

    def get_line(self, cart_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def get_line_by_id(self, cart_id: int, item_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.id == item_id,
                CartItemModel.cart_id == cart_id,
            )
        ).scalar_one_or_none()

    def add_line(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def add_or_increment_line(self, cart_id: int, product_id: int, quantity: int) -> CartItemModel:
        """Jedna pozycja na (koszyk, produkt) - kolejne dodanie zwieksza ilosc."""
        item = self.get_line(cart_id, product_id)
        if item is None:
            try:
                with self.db.begin_nested():
                    return self.add_line(
                        CartItemModel(cart_id=cart_id, product_id=product_id, quantity=quantity)
                    )
            except IntegrityError:
                #rownolegly request wstawil ta sama pozycje, doliczamy do niej
                item = self.get_line(cart_id, product_id)
                if item is None:
                    raise

        item.quantity += quantity
        return self.add_line(item)

    def delete_line(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def delete_lines(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount
