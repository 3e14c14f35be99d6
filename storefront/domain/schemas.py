# storefront/domain/schemas.py
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, List, Optional
from decimal import Decimal
from datetime import datetime


class PaymentMethod(str, Enum):
    COD = "cod"
    CARD = "card"
    ESEWA = "esewa"
    KHALTI = "khalti"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


class UserCreate(BaseModel):
    """Schema for creating a user."""

    id: int = Field(..., gt=0, description="User ID (must be > 0)")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")


class UserRead(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CartItemIn(BaseModel):
    """Schema for adding a product to the cart."""

    product_id: int = Field(..., gt=0, description="Product ID (must be > 0)")
    quantity: int = Field(1, gt=0, description="Quantity to add (must be > 0)")


class CartItemUpdate(BaseModel):
    quantity: int = Field(..., gt=0, description="New quantity (must be > 0)")


class CartItemOut(BaseModel):
    id: int
    product_id: int
    quantity: int
    unit_price: Optional[Decimal] = None

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    """Cart view. `total` is informational and uses current catalog prices."""

    cart_id: int
    user_id: int
    items: List[CartItemOut]
    total: Decimal


class CheckoutIn(BaseModel):
    payment_method: PaymentMethod


class OrderOut(BaseModel):
    id: int
    user_id: int
    total_amount: Decimal
    status: OrderStatus
    payment_method: PaymentMethod
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class OrderLineOut(BaseModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    unit_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class CheckoutOut(BaseModel):
    """Order together with its lines (checkout response and order detail)."""

    order: OrderOut
    order_lines: List[OrderLineOut]


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class ErrorOut(BaseModel):
    error_kind: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)
