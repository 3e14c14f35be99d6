#storefront/api/routers/cart.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import (
    CartItemIn,
    CartItemUpdate,
    CartOut,
)
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartOut)
def view_cart(
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    return get_service(db).get_cart(user_id)


@router.post("/items", response_model=CartOut)
def add_item(
    payload: CartItemIn,
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    return get_service(db).add_product(
        user_id=user_id,
        product_id=payload.product_id,
        quantity=payload.quantity,
    )


@router.patch("/items/{item_id}", response_model=CartOut)
def edit_item(
    item_id: int,
    payload: CartItemUpdate,
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    return get_service(db).update_quantity(user_id, item_id, payload.quantity)


@router.delete("/items/{item_id}", response_model=CartOut)
def remove_item(
    item_id: int,
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    return get_service(db).remove_item(user_id, item_id)
