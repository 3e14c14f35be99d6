import pytest

from storefront.domain.errors import InvalidStatusTransition, OrderAccessDenied, OrderNotFound
from storefront.services.checkout_service import CheckoutService
from storefront.services.order_service import OrderService


@pytest.fixture
def placed_order(db, make_product, fill_cart, notifier):
    a = make_product("A", "10.00", 5)
    fill_cart(1, [(a.id, 2)])
    return CheckoutService(db, notifier).checkout(1, "cod")


def test_get_order_with_lines(db, placed_order):
    detail = OrderService(db).get_order(placed_order["order"]["id"], 1)

    assert detail["order"]["id"] == placed_order["order"]["id"]
    assert [line["quantity"] for line in detail["order_lines"]] == [2]


def test_get_order_errors(db, placed_order):
    service = OrderService(db)

    with pytest.raises(OrderNotFound):
        service.get_order(999, 1)
    with pytest.raises(OrderAccessDenied):
        service.get_order(placed_order["order"]["id"], 2)


def test_list_orders_only_own(db, placed_order, make_user):
    make_user(2)

    assert [o["id"] for o in OrderService(db).list_orders(1)] == [placed_order["order"]["id"]]
    assert OrderService(db).list_orders(2) == []


def test_status_moves_forward_one_step(db, placed_order):
    service = OrderService(db)
    order_id = placed_order["order"]["id"]

    assert service.update_status(order_id, "paid")["status"] == "paid"
    assert service.update_status(order_id, "shipped")["status"] == "shipped"
    assert service.update_status(order_id, "delivered")["status"] == "delivered"


@pytest.mark.parametrize("target", ["pending", "shipped", "delivered"])
def test_status_cannot_skip_or_repeat(db, placed_order, target):
    with pytest.raises(InvalidStatusTransition) as exc:
        OrderService(db).update_status(placed_order["order"]["id"], target)

    assert exc.value.details["current"] == "pending"


def test_status_of_missing_order(db):
    with pytest.raises(OrderNotFound):
        OrderService(db).update_status(1, "paid")
