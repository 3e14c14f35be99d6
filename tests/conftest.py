"""
Pytest configuration and fixtures for storefront tests.

Every test gets its own file-backed SQLite database so that concurrent
checkouts run on separate connections, like they would against Postgres.
"""
import os
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

# Set test environment before importing storefront modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
os.environ["SQLITE_BUSY_TIMEOUT"] = "30"

from fastapi.testclient import TestClient  # noqa: E402

from storefront.data.database import get_db, init_db, make_engine, make_session_factory  # noqa: E402
from storefront.data.models import CartItemModel, CartModel, ProductModel, UserModel  # noqa: E402


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'storefront.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def db(session_factory):
    """Session for arranging and inspecting state in a single thread."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def notifier() -> MagicMock:
    """Stand-in for NotificationService so service tests never touch Celery."""
    return MagicMock()


@pytest.fixture
def client(session_factory) -> TestClient:
    from storefront.main import create_app

    app = create_app(init_database=False)

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make(user_id: int, name: str = "Customer") -> UserModel:
        user = UserModel(id=user_id, name=name)
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_product(db):
    def _make(name: str, price: str, stock: int) -> ProductModel:
        product = ProductModel(name=name, price=Decimal(price), stock=stock)
        db.add(product)
        db.commit()
        return product

    return _make


@pytest.fixture
def fill_cart(db):
    """Create (or reuse) the user's cart and put the given lines in it."""

    def _fill(user_id: int, lines) -> CartModel:
        cart = db.query(CartModel).filter_by(user_id=user_id).one_or_none()
        if cart is None:
            if db.get(UserModel, user_id) is None:
                db.add(UserModel(id=user_id, name=f"user-{user_id}"))
            cart = CartModel(user_id=user_id)
            db.add(cart)
            db.flush()
        for product_id, quantity in lines:
            db.add(CartItemModel(cart_id=cart.id, product_id=product_id, quantity=quantity))
        db.commit()
        return cart

    return _fill


@pytest.fixture
def cart_snapshot():
    """Sorted (product_id, quantity) pairs of a cart, for before/after comparisons."""

    def _snapshot(session, cart_id: int):
        return sorted(
            (line.product_id, line.quantity)
            for line in session.query(CartItemModel).filter_by(cart_id=cart_id).all()
        )

    return _snapshot
