# freshbox/services/payment_service.py
"""
Stand-in for the Easypaisa and JazzCash wallet APIs.

A charge request is always accepted; the order's payment is then marked
completed after a fixed delay, the way a gateway callback would. Scheduled
confirmations are lost if the process exits first.
"""

import asyncio
import logging
import time
from starlette.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError

from freshbox.crud import order as crud_order
from freshbox.crud.order import InvalidStatusTransition
from freshbox.models.order import PaymentMethod, PaymentStatus

logger = logging.getLogger(__name__)

TRANSACTION_PREFIXES = {
    PaymentMethod.easypaisa: "EP",
    PaymentMethod.jazzcash: "JC",
}


def new_transaction_id(method: PaymentMethod) -> str:
    return f"{TRANSACTION_PREFIXES[method]}{int(time.time() * 1000)}"


def mark_payment_completed(session_factory, order_id: int, enforce: bool = False) -> bool:
    db = session_factory()
    try:
        order = crud_order.update_payment_status(db, order_id, PaymentStatus.completed, enforce=enforce)
        if order is None:
            logger.warning(f"Payment callback for missing order {order_id}")
            return False
        return True
    except InvalidStatusTransition as e:
        logger.warning(f"Payment callback ignored for order {order_id}: {e}")
        return False
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Payment callback failed for order {order_id}: {e}")
        return False
    finally:
        db.close()


async def confirm_payment_later(session_factory, order_id: int, delay_seconds: float, enforce: bool = False):
    if delay_seconds > 0:
        await asyncio.sleep(delay_seconds)
    completed = await run_in_threadpool(mark_payment_completed, session_factory, order_id, enforce)
    if completed:
        logger.info(f"Simulated wallet confirmed payment for order {order_id}")
