from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from freshbox.core.config import settings
from freshbox.core.rate_limiter import limit_public_writes
from freshbox.crud import order as crud_order
from freshbox.crud.order import InvalidStatusTransition
from freshbox.db.deps import get_db
from freshbox.models.order import OrderStatus, PaymentStatus
from freshbox.schemas.order import (
    OrderCreate, OrderOut, OrderDetailOut, ReceiptOut,
    OrderStatusUpdate, PaymentStatusUpdate,
)
from freshbox.services import order_service
from freshbox.services.order_service import OrderSubmissionError, OrderValidationError

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post(
    "",
    response_model=OrderOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(limit_public_writes)],
)
def create_order(order_data: OrderCreate, db: Session = Depends(get_db)):
    try:
        return order_service.submit_order(db, order_data)
    except OrderValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OrderSubmissionError as e:
        logger.warning(f"Order rejected: {e}")
        raise HTTPException(status_code=400, detail="Failed to create order")

@router.get("", response_model=List[OrderDetailOut])
def list_orders(
    order_status: Optional[OrderStatus] = Query(default=None, alias="orderStatus"),
    payment_status: Optional[PaymentStatus] = Query(default=None, alias="paymentStatus"),
    db: Session = Depends(get_db),
):
    try:
        return crud_order.get_orders(db, order_status=order_status, payment_status=payment_status)
    except SQLAlchemyError as e:
        logger.error(f"Order fetch failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch orders")

@router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(order_id: int, db: Session = Depends(get_db)):
    order = crud_order.get_order_by_id(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order

@router.get("/{order_id}/receipt", response_model=ReceiptOut)
def get_receipt(order_id: int, db: Session = Depends(get_db)):
    order = crud_order.get_order_by_id(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order_service.build_receipt(order)

@router.put("/{order_id}/status", response_model=OrderOut)
def update_order_status(order_id: int, status_data: OrderStatusUpdate, db: Session = Depends(get_db)):
    try:
        order = crud_order.update_order_status(
            db, order_id, status_data.status, enforce=settings.ENFORCE_STATUS_TRANSITIONS
        )
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))

    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order

@router.put("/{order_id}/payment", response_model=OrderOut)
def update_payment_status(order_id: int, status_data: PaymentStatusUpdate, db: Session = Depends(get_db)):
    try:
        order = crud_order.update_payment_status(
            db, order_id, status_data.status, enforce=settings.ENFORCE_STATUS_TRANSITIONS
        )
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))

    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
