# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import (
    CheckoutIn,
    CheckoutOut,
    ErrorOut,
    OrderOut,
    OrderStatusUpdate,
)
from storefront.services.checkout_service import CheckoutService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])

CHECKOUT_ERRORS = {
    400: {"model": ErrorOut, "description": "EmptyCart or InsufficientStock"},
    404: {"model": ErrorOut, "description": "CartNotFound or ProductNotFound"},
    500: {"model": ErrorOut, "description": "StorageFault"},
}


@router.post("/place", response_model=CheckoutOut, status_code=201, responses=CHECKOUT_ERRORS)
def place_order(
    payload: CheckoutIn,
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    """
    Tworzy zamowienie z koszyka usera, zdejmuje stany i czysci koszyk.
    Wszystko albo nic.
    """
    return CheckoutService(db).checkout(user_id, payload.payment_method)


@router.get("/", response_model=List[OrderOut])
def view_orders(
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    return OrderService(db).list_orders(user_id)


@router.get("/{order_id}", response_model=CheckoutOut)
def get_order(
    order_id: int,
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    """
    Pobiera zamowienie z pozycjami.
    """
    return OrderService(db).get_order(order_id, user_id)


@router.patch("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
):
    """
    Endpoint dla strony platnosci/wysylki, nie dla klienta sklepu.
    Nie sprawdza wlasciciela zamowienia - dostep ma ograniczac warstwa przed API.
    """
    return OrderService(db).update_status(order_id, payload.status)
