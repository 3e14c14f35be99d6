"""
Storefront exception hierarchy.

Every error carries an ``error_kind``, a human-readable ``message`` and a
``details`` dict, and knows the HTTP status the API layer maps it to.

    StorefrontError
    ├── CheckoutError
    │   ├── CartNotFound
    │   ├── EmptyCart
    │   ├── ProductNotFound
    │   └── InsufficientStock
    ├── StorageFault
    ├── UserNotFound
    ├── CartLineNotFound
    ├── InvalidPaymentMethod
    ├── InvalidQuantity
    ├── OrderNotFound
    ├── OrderAccessDenied
    └── InvalidStatusTransition
"""
from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """
    Base exception for all storefront errors.

    Attributes:
        message: Human-readable error description
        details: Additional context the caller can act on
        status_code: HTTP status used by the API layer
    """

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def error_kind(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_kind": self.error_kind,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.error_kind}(message={self.message!r})"


# =============================================================================
# CHECKOUT ERRORS (expected, user-correctable)
# =============================================================================

class CheckoutError(StorefrontError):
    """Base class for checkout rejections. No state is mutated when raised."""

    status_code = 400


class CartNotFound(CheckoutError):
    status_code = 404

    def __init__(self, user_id: int):
        super().__init__("Cart not found", {"user_id": user_id})


class EmptyCart(CheckoutError):
    def __init__(self, cart_id: int):
        super().__init__("Cart is empty", {"cart_id": cart_id})


class ProductNotFound(CheckoutError):
    status_code = 404

    def __init__(self, product_id: int, cart_item_id: Optional[int] = None):
        details: Dict[str, Any] = {"product_id": product_id}
        if cart_item_id is not None:
            details["cart_item_id"] = cart_item_id
        super().__init__(f"Product {product_id} not found", details)


class InsufficientStock(CheckoutError):
    def __init__(self, product_id: int, product_name: str, available: int, requested: int):
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for product {product_name}. Available stock: {available}",
            {
                "product_id": product_id,
                "product_name": product_name,
                "available": available,
                "requested": requested,
            },
        )


# =============================================================================
# INFRASTRUCTURE
# =============================================================================

class StorageFault(StorefrontError):
    """Database/transaction failure. The public message never exposes internals."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


# =============================================================================
# SUPPORTING ERRORS
# =============================================================================

class UserNotFound(StorefrontError):
    status_code = 404

    def __init__(self, user_id: int):
        super().__init__("User not found", {"user_id": user_id})


class CartLineNotFound(StorefrontError):
    status_code = 404

    def __init__(self, item_id: int):
        super().__init__("Cart item not found", {"item_id": item_id})


class InvalidPaymentMethod(StorefrontError):
    status_code = 400

    def __init__(self, payment_method: str):
        super().__init__("Invalid payment method", {"payment_method": payment_method})


class InvalidQuantity(StorefrontError):
    status_code = 400

    def __init__(self, quantity: int):
        super().__init__("Quantity must be greater than 0", {"quantity": quantity})


class OrderNotFound(StorefrontError):
    status_code = 404

    def __init__(self, order_id: int):
        super().__init__("Order not found", {"order_id": order_id})


class OrderAccessDenied(StorefrontError):
    status_code = 403

    def __init__(self, order_id: int):
        super().__init__("Access to this order is denied", {"order_id": order_id})


class InvalidStatusTransition(StorefrontError):
    status_code = 409

    def __init__(self, order_id: int, current: str, requested: str):
        super().__init__(
            f"Cannot move order from {current} to {requested}",
            {"order_id": order_id, "current": current, "requested": requested},
        )
