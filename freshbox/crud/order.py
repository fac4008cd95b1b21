import logging
from decimal import Decimal
from typing import Dict, FrozenSet, List, Optional
from sqlalchemy.orm import Session, joinedload, selectinload
from freshbox.models.order import Order, OrderItem, OrderStatus, PaymentStatus
from freshbox.schemas.order import OrderCreate, OrderItemCreate

logger = logging.getLogger(__name__)

ORDER_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.processing: frozenset({OrderStatus.confirmed, OrderStatus.cancelled}),
    OrderStatus.confirmed: frozenset({OrderStatus.delivered, OrderStatus.cancelled}),
    OrderStatus.delivered: frozenset(),
    OrderStatus.cancelled: frozenset(),
}

PAYMENT_TRANSITIONS: Dict[PaymentStatus, FrozenSet[PaymentStatus]] = {
    PaymentStatus.pending: frozenset({PaymentStatus.completed, PaymentStatus.failed}),
    PaymentStatus.completed: frozenset(),
    PaymentStatus.failed: frozenset(),
}


class InvalidStatusTransition(ValueError):
    def __init__(self, field: str, current, requested):
        self.field = field
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change {field} from '{current.value}' to '{requested.value}'")


def can_transition(table: Dict, current, requested) -> bool:
    # Re-setting the current value is always a no-op
    return current == requested or requested in table.get(current, frozenset())


def create_order(db: Session, customer_id: int, data: OrderCreate, total_amount: Decimal) -> Order:
    """Stage the order row; the caller owns the commit."""
    order = Order(
        customer_id=customer_id,
        box_type_id=data.box_type_id,
        total_amount=total_amount,
        payment_method=data.payment_method,
        payment_status=PaymentStatus.pending,
        order_status=OrderStatus.processing,
        delivery_date=data.delivery_date,
        special_instructions=data.special_instructions,
    )
    db.add(order)
    db.flush()  # flush so order.id is available
    return order

def create_order_items(db: Session, order_id: int, items: List[OrderItemCreate]) -> List[OrderItem]:
    order_items = [
        OrderItem(
            order_id=order_id,
            product_id=item.product_id,
            quantity=item.quantity,
            unit_price=item.unit_price,  # as submitted, not the live catalog price
        )
        for item in items
    ]
    db.add_all(order_items)
    db.flush()
    return order_items

def _with_details(query):
    return query.options(
        joinedload(Order.customer),
        joinedload(Order.box_type),
        selectinload(Order.order_items).joinedload(OrderItem.product),
    )

def get_orders(
    db: Session,
    order_status: Optional[OrderStatus] = None,
    payment_status: Optional[PaymentStatus] = None,
) -> List[Order]:
    query = _with_details(db.query(Order))
    if order_status is not None:
        query = query.filter(Order.order_status == order_status)
    if payment_status is not None:
        query = query.filter(Order.payment_status == payment_status)
    return query.order_by(Order.created_at.desc(), Order.id.desc()).all()

def get_order_by_id(db: Session, order_id: int) -> Optional[Order]:
    return _with_details(db.query(Order)).filter(Order.id == order_id).first()

def update_order_status(db: Session, order_id: int, new_status: OrderStatus, enforce: bool = False) -> Optional[Order]:
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        return None
    if enforce and not can_transition(ORDER_TRANSITIONS, order.order_status, new_status):
        raise InvalidStatusTransition("order status", order.order_status, new_status)

    previous = order.order_status
    order.order_status = new_status
    db.commit()
    db.refresh(order)
    logger.info(f"Order {order_id} status {previous.value} -> {new_status.value}")
    return order

def update_payment_status(db: Session, order_id: int, new_status: PaymentStatus, enforce: bool = False) -> Optional[Order]:
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        return None
    if enforce and not can_transition(PAYMENT_TRANSITIONS, order.payment_status, new_status):
        raise InvalidStatusTransition("payment status", order.payment_status, new_status)

    previous = order.payment_status
    order.payment_status = new_status
    db.commit()
    db.refresh(order)
    logger.info(f"Order {order_id} payment {previous.value} -> {new_status.value}")
    return order
