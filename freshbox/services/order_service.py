# freshbox/services/order_service.py
import logging
from datetime import timedelta
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from freshbox.core.config import settings
from freshbox.crud import catalog as crud_catalog
from freshbox.crud import customer as crud_customer
from freshbox.crud import order as crud_order
from freshbox.models.order import Order
from freshbox.schemas.order import OrderCreate
from freshbox.services.cart import line_total, order_total, round_money

logger = logging.getLogger(__name__)


class OrderSubmissionError(Exception):
    """Checkout could not be turned into an order; nothing was stored."""


class OrderValidationError(OrderSubmissionError):
    """The payload is well-formed but inconsistent (e.g. wrong total)."""


def submit_order(db: Session, data: OrderCreate) -> Order:
    """
    Create the customer (if new), the order and its items in one transaction.

    The stored total is computed from the submitted lines. Unit prices are kept
    exactly as submitted so the order reflects the price the customer saw.
    """
    total_amount = order_total(data.items)
    if data.total_amount is not None and round_money(data.total_amount) != total_amount:
        raise OrderValidationError(
            f"Total amount {data.total_amount} does not match items total {total_amount}"
        )

    try:
        if crud_catalog.get_box_type_by_id(db, data.box_type_id) is None:
            raise OrderSubmissionError(f"Box type {data.box_type_id} does not exist")

        requested_ids = {item.product_id for item in data.items}
        missing = requested_ids - crud_catalog.get_existing_product_ids(db, list(requested_ids))
        if missing:
            raise OrderSubmissionError(f"Unknown products: {sorted(missing)}")

        customer = crud_customer.get_or_create_customer(db, data.customer)
        order = crud_order.create_order(db, customer.id, data, total_amount)
        crud_order.create_order_items(db, order.id, data.items)
        db.commit()
    except OrderSubmissionError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Order creation failed for {data.customer.email}: {e}")
        raise OrderSubmissionError("Failed to create order") from e

    db.refresh(order)
    logger.info(
        f"Order {order.id} created for customer {customer.id}: "
        f"{len(data.items)} items, total {total_amount}, via {data.payment_method.value}"
    )
    return order


def format_order_number(order_id: int) -> str:
    return f"{settings.ORDER_NUMBER_PREFIX}{order_id:06d}"


def build_receipt(order: Order) -> dict:
    """Receipt view of a stored order: lines, totals and expected delivery."""
    lines = []
    for item in order.order_items:
        lines.append({
            "product_id": item.product_id,
            "product_name": item.product.name,
            "unit": item.product.unit,
            "quantity": item.quantity,
            "unit_price": item.unit_price,
            "line_total": round_money(line_total(item.quantity, item.unit_price)),
        })

    subtotal = order_total(order.order_items)
    delivery_date = order.delivery_date or order.created_at + timedelta(days=settings.DELIVERY_OFFSET_DAYS)

    return {
        "id": order.id,
        "order_number": format_order_number(order.id),
        "customer": order.customer,
        "box_type": order.box_type,
        "items": lines,
        "subtotal": subtotal,
        "box_price": round_money(0),
        "total": order.total_amount,
        "payment_method": order.payment_method,
        "payment_status": order.payment_status,
        "order_date": order.created_at,
        "delivery_date": delivery_date,
    }
