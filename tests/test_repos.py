from decimal import Decimal

from storefront.data.models import CartItemModel, OrderItemModel, OrderModel
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo


def test_conditional_decrement_only_when_enough_stock(db, make_product):
    product = make_product("A", "1.00", 3)
    repo = ProductRepo(db)

    assert repo.conditional_decrement_stock(product.id, 2) == 1
    assert repo.conditional_decrement_stock(product.id, 2) == 0
    assert repo.conditional_decrement_stock(product.id, 1) == 1
    db.commit()

    assert repo.get_by_id(product.id, for_update=True).stock == 0


def test_conditional_decrement_unknown_product(db):
    assert ProductRepo(db).conditional_decrement_stock(12345, 1) == 0


def test_get_by_id_missing(db):
    assert ProductRepo(db).get_by_id(42) is None
    assert ProductRepo(db).get_by_id(42, for_update=True) is None


def test_get_or_create_cart_is_idempotent(db, make_user):
    make_user(1)
    repo = CartRepo(db)

    first = repo.get_or_create_cart(1)
    second = repo.get_or_create_cart(1)
    db.commit()

    assert first.id == second.id
    assert repo.get_cart_by_user(1).id == first.id


def test_delete_lines_keeps_cart(db, make_product, fill_cart):
    a = make_product("A", "1.00", 3)
    b = make_product("B", "1.00", 3)
    cart = fill_cart(1, [(a.id, 1), (b.id, 2)])
    repo = CartRepo(db)

    assert repo.delete_lines(cart.id) == 2
    db.commit()

    assert repo.get_lines(cart.id) == []
    assert repo.get_cart(cart.id) is not None


def test_get_line_by_id_scoped_to_cart(db, make_product, fill_cart):
    a = make_product("A", "1.00", 3)
    mine = fill_cart(1, [(a.id, 1)])
    other = fill_cart(2, [(a.id, 1)])
    repo = CartRepo(db)
    other_line = db.query(CartItemModel).filter_by(cart_id=other.id).one()

    assert repo.get_line_by_id(mine.id, other_line.id) is None
    assert repo.get_line_by_id(other.id, other_line.id) is not None


def test_orders_listed_newest_first(db, make_user):
    make_user(1)
    make_user(2)
    repo = OrderRepo(db)
    first = repo.create_order(
        OrderModel(user_id=1, status="pending", payment_method="cod", total_amount=Decimal("1.00"))
    )
    second = repo.create_order(
        OrderModel(user_id=1, status="pending", payment_method="card", total_amount=Decimal("2.00"))
    )
    repo.create_order(
        OrderModel(user_id=2, status="pending", payment_method="cod", total_amount=Decimal("3.00"))
    )
    repo.bulk_create_lines(
        [OrderItemModel(order_id=first.id, product_id=1, quantity=1, unit_price=Decimal("1.00"))]
    )
    db.commit()

    listed = repo.list_orders_for_user(1)

    assert [o.id for o in listed] == [second.id, first.id]
    assert [line.product_id for line in repo.get_lines(first.id)] == [1]
    assert repo.get_lines(second.id) == []
