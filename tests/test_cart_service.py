from decimal import Decimal

import pytest

from storefront.domain.errors import (
    CartLineNotFound,
    CartNotFound,
    InvalidQuantity,
    ProductNotFound,
    UserNotFound,
)
from storefront.data.models import ProductModel
from storefront.services.cart_service import CartService


def test_first_add_creates_cart(db, make_user, make_product):
    make_user(1)
    a = make_product("A", "10.00", 5)

    cart = CartService(db).add_product(1, a.id, 2)

    assert cart["user_id"] == 1
    assert [(i["product_id"], i["quantity"]) for i in cart["items"]] == [(a.id, 2)]
    assert cart["total"] == Decimal("20.00")


def test_adding_same_product_increments_quantity(db, make_user, make_product):
    make_user(1)
    a = make_product("A", "10.00", 5)
    service = CartService(db)

    service.add_product(1, a.id, 2)
    cart = service.add_product(1, a.id, 3)

    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 5


def test_adding_does_not_touch_stock(db, make_user, make_product):
    make_user(1)
    a = make_product("A", "10.00", 5)

    CartService(db).add_product(1, a.id, 50)

    db.expire_all()
    assert db.get(ProductModel, a.id).stock == 5


def test_add_rejects_unknown_product_and_user(db, make_user, make_product):
    make_user(1)
    a = make_product("A", "10.00", 5)
    service = CartService(db)

    with pytest.raises(ProductNotFound):
        service.add_product(1, 999, 1)
    with pytest.raises(UserNotFound):
        service.add_product(2, a.id, 1)
    with pytest.raises(InvalidQuantity):
        service.add_product(1, a.id, 0)


def test_get_cart_without_cart(db, make_user):
    make_user(1)

    with pytest.raises(CartNotFound):
        CartService(db).get_cart(1)


def test_total_skips_products_gone_from_catalog(db, make_product, fill_cart):
    a = make_product("A", "4.00", 5)
    fill_cart(1, [(a.id, 2), (999, 1)])

    cart = CartService(db).get_cart(1)

    assert cart["total"] == Decimal("8.00")
    missing = [i for i in cart["items"] if i["product_id"] == 999][0]
    assert missing["unit_price"] is None


def test_update_and_remove_line(db, make_user, make_product):
    make_user(1)
    a = make_product("A", "1.00", 5)
    b = make_product("B", "2.00", 5)
    service = CartService(db)
    service.add_product(1, a.id, 1)
    cart = service.add_product(1, b.id, 1)
    line_a = [i for i in cart["items"] if i["product_id"] == a.id][0]

    cart = service.update_quantity(1, line_a["id"], 4)
    assert [i["quantity"] for i in cart["items"] if i["id"] == line_a["id"]] == [4]

    cart = service.remove_item(1, line_a["id"])
    assert [i["product_id"] for i in cart["items"]] == [b.id]


def test_cannot_touch_another_users_line(db, make_product, fill_cart):
    a = make_product("A", "1.00", 5)
    fill_cart(1, [])
    other = fill_cart(2, [(a.id, 1)])
    other_line_id = CartService(db).get_cart(2)["items"][0]["id"]
    service = CartService(db)

    with pytest.raises(CartLineNotFound):
        service.update_quantity(1, other_line_id, 3)
    with pytest.raises(CartLineNotFound):
        service.remove_item(1, other_line_id)
    assert CartService(db).get_cart(2)["cart_id"] == other.id
    with pytest.raises(InvalidQuantity):
        service.update_quantity(2, other_line_id, -1)
