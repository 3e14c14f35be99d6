# storefront/services/checkout_service.py
from decimal import Decimal
from typing import Any, Dict, List, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.database import run_in_transaction
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.product import ProductModel
from storefront.domain.errors import (
    CartNotFound,
    CheckoutError,
    EmptyCart,
    InsufficientStock,
    InvalidPaymentMethod,
    ProductNotFound,
    StorageFault,
)
from storefront.domain.schemas import OrderStatus, PaymentMethod
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CENTS = Decimal("0.01")


def order_to_dict(order: OrderModel) -> Dict[str, Any]:
    return {
        "id": order.id,
        "user_id": order.user_id,
        "total_amount": order.total_amount,
        "status": order.status,
        "payment_method": order.payment_method,
        "created_at": order.created_at,
    }


def order_line_to_dict(line: OrderItemModel) -> Dict[str, Any]:
    return {
        "id": line.id,
        "order_id": line.order_id,
        "product_id": line.product_id,
        "quantity": line.quantity,
        "unit_price": line.unit_price,
    }


class CheckoutService:
    """
    Zamiana koszyka w zamowienie.

    Caly checkout (odczyt koszyka, walidacja stanow, zamowienie + pozycje,
    zdjecie stanow, czyszczenie koszyka) to jedna transakcja bazy.
    Dowolny blad = rollback, nic nie zostaje zapisane polowicznie.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.db = db
        self.carts = CartRepo(db)
        self.products = ProductRepo(db)
        self.orders = OrderRepo(db)
        self.notification_service = notification_service or NotificationService()

    def checkout(self, user_id: int, payment_method: PaymentMethod | str) -> Dict[str, Any]:
        try:
            method = PaymentMethod(payment_method)
        except ValueError:
            raise InvalidPaymentMethod(str(payment_method))

        try:
            order, lines = run_in_transaction(
                self.db, lambda db: self._place_order(user_id, method)
            )
        except CheckoutError as e:
            logger.warning(f"Checkout rejected for user {user_id}: {e.error_kind} {e.details}")
            raise
        except SQLAlchemyError as e:
            logger.exception(f"Checkout for user {user_id} failed in storage layer")
            raise StorageFault() from e
        except Exception:
            # transakcja juz cofnieta w run_in_transaction
            logger.exception(f"Checkout for user {user_id} failed unexpectedly")
            raise

        logger.info(
            f"Order {order.id} placed by user {user_id}: "
            f"total={order.total_amount} lines={len(lines)} payment={order.payment_method}"
        )

        self._notify(user_id, order.id)

        return {
            "order": order_to_dict(order),
            "order_lines": [order_line_to_dict(line) for line in lines],
        }

    def _place_order(
        self, user_id: int, payment_method: PaymentMethod
    ) -> Tuple[OrderModel, List[OrderItemModel]]:
        cart = self.carts.get_cart_by_user(user_id)
        if not cart:
            raise CartNotFound(user_id)

        #snapshot pozycji, wszystkie dalsze ilosci biora sie tylko stad
        #sortowanie po product_id = staly porzadek lockow miedzy rownoleglymi checkoutami
        snapshot = sorted(
            ((item.id, item.product_id, item.quantity) for item in self.carts.get_lines(cart.id)),
            key=lambda line: line[1],
        )
        if not snapshot:
            raise EmptyCart(cart.id)

        priced: List[Tuple[ProductModel, int, Decimal]] = []
        total = Decimal("0.00")

        for item_id, product_id, quantity in snapshot:
            product = self.products.get_by_id(product_id, for_update=True)

            if product is None:
                raise ProductNotFound(product_id, cart_item_id=item_id)

            if product.stock < quantity:
                raise InsufficientStock(product.id, product.name, product.stock, quantity)

            # cena odczytana raz, pod lockiem, i ta sama idzie do pozycji zamowienia
            unit_price = Decimal(str(product.price)).quantize(CENTS)
            total += unit_price * quantity
            priced.append((product, quantity, unit_price))

        order = self.orders.create_order(
            OrderModel(
                user_id=user_id,
                status=OrderStatus.PENDING.value,
                payment_method=payment_method.value,
                total_amount=total.quantize(CENTS),
            )
        )

        lines = self.orders.bulk_create_lines(
            [
                OrderItemModel(
                    order_id=order.id,
                    product_id=product.id,
                    quantity=quantity,
                    unit_price=unit_price,
                )
                for product, quantity, unit_price in priced
            ]
        )

        for product, quantity, _ in priced:
            # warunkowy update; 0 wierszy = ktos zdjal stan miedzy odczytem a zapisem
            if self.products.conditional_decrement_stock(product.id, quantity) != 1:
                current = self.products.get_by_id(product.id, for_update=True)
                available = current.stock if current is not None else 0
                raise InsufficientStock(product.id, product.name, available, quantity)
            self.db.expire(product, ["stock"])

        removed = self.carts.delete_lines(cart.id)
        logger.info(f"Cart {cart.id} cleared after checkout ({removed} lines)")

        return order, lines

    def _notify(self, user_id: int, order_id: int) -> None:
        # zamowienie jest juz zacommitowane, problem z brokerem nie moze go cofnac
        try:
            self.notification_service.send_order_notification(user_id, order_id)
        except Exception as e:
            logger.warning(f"Failed to enqueue notification for order {order_id}: {e}")
