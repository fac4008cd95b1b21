from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from freshbox.core.config import settings
from freshbox.core.rate_limiter import limit_public_writes
from freshbox.crud import order as crud_order
from freshbox.db.deps import get_db, get_session_factory
from freshbox.models.order import PaymentMethod
from freshbox.schemas.payment import PaymentRequest, PaymentResponse
from freshbox.services import payment_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post(
    "/{method}",
    response_model=PaymentResponse,
    dependencies=[Depends(limit_public_writes)],
)
def process_wallet_payment(
    method: PaymentMethod,
    data: PaymentRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    session_factory=Depends(get_session_factory),
):
    # Simulated gateway: accept now, confirm after a delay
    order = crud_order.get_order_by_id(db, data.order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    transaction_id = payment_service.new_transaction_id(method)
    background_tasks.add_task(
        payment_service.confirm_payment_later,
        session_factory,
        order.id,
        settings.PAYMENT_CALLBACK_DELAY_SECONDS,
        settings.ENFORCE_STATUS_TRANSITIONS,
    )
    logger.info(f"{method.value} payment {transaction_id} accepted for order {order.id}")

    return PaymentResponse(
        success=True,
        transaction_id=transaction_id,
        message="Payment processed successfully",
    )
