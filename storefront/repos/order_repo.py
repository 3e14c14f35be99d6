# storefront/repos/order_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def bulk_create_lines(self, lines: List[OrderItemModel]) -> List[OrderItemModel]:
        self.db.add_all(lines)
        self.db.flush()
        return lines

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_lines(self, order_id: int) -> List[OrderItemModel]:
        return list(
            self.db.execute(
                select(OrderItemModel)
                .where(OrderItemModel.order_id == order_id)
                .order_by(OrderItemModel.id)
            ).scalars().all()
        )

    def list_orders_for_user(self, user_id: int) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars().all()
        )

    def update_status(self, order: OrderModel, status: str) -> OrderModel:
        order.status = status
        self.db.flush()
        return order
