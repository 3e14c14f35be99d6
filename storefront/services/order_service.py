# storefront/services/order_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from storefront.data.database import run_in_transaction
from storefront.domain.errors import InvalidStatusTransition, OrderAccessDenied, OrderNotFound
from storefront.domain.schemas import OrderStatus
from storefront.repos.order_repo import OrderRepo
from storefront.services.checkout_service import order_line_to_dict, order_to_dict
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# jedyne dozwolone przejscia, zawsze o krok do przodu
NEXT_STATUS = {
    OrderStatus.PENDING: OrderStatus.PAID,
    OrderStatus.PAID: OrderStatus.SHIPPED,
    OrderStatus.SHIPPED: OrderStatus.DELIVERED,
}


class OrderService:
    """
    Odczyt zamowien i zmiana statusu (platnosc/wysylka).
    Tworzenie zamowien jest w CheckoutService.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)

    def list_orders(self, user_id: int) -> List[Dict[str, Any]]:
        return [order_to_dict(o) for o in self.repo.list_orders_for_user(user_id)]

    def get_order(self, order_id: int, user_id: int) -> Dict[str, Any]:
        """
        Use Case: Pobranie zamowienia z pozycjami (Query).
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise OrderNotFound(order_id)

        if order.user_id != user_id:
            raise OrderAccessDenied(order_id)

        return {
            "order": order_to_dict(order),
            "order_lines": [order_line_to_dict(line) for line in self.repo.get_lines(order_id)],
        }

    def update_status(self, order_id: int, status: OrderStatus | str) -> Dict[str, Any]:
        requested = OrderStatus(status)

        def _update(db: Session):
            order = self.repo.get_order(order_id)
            if not order:
                raise OrderNotFound(order_id)

            current = OrderStatus(order.status)
            if NEXT_STATUS.get(current) != requested:
                raise InvalidStatusTransition(order_id, current.value, requested.value)

            return self.repo.update_status(order, requested.value)

        order = run_in_transaction(self.db, _update)
        logger.info(f"Order {order_id} moved to {order.status}")
        return order_to_dict(order)
