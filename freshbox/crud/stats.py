from decimal import Decimal
from sqlalchemy import func
from sqlalchemy.orm import Session
from freshbox.crud.catalog import count_products
from freshbox.crud.customer import count_customers
from freshbox.models.order import Order, PaymentStatus

def get_order_stats(db: Session, completed_only: bool = False) -> dict:
    """Recomputed on every call. Revenue counts every order unless completed_only is set."""
    total_orders = db.query(Order).count()

    revenue_query = db.query(func.sum(Order.total_amount))
    if completed_only:
        revenue_query = revenue_query.filter(Order.payment_status == PaymentStatus.completed)
    total_revenue = revenue_query.scalar()

    return {
        "total_orders": total_orders,
        "total_revenue": f"{Decimal(total_revenue):.2f}" if total_revenue is not None else "0",
        "total_customers": count_customers(db),
        "total_products": count_products(db),
    }

def get_billing_summary(db: Session) -> dict:
    rows = (
        db.query(Order.payment_status, func.count(Order.id), func.sum(Order.total_amount))
        .group_by(Order.payment_status)
        .all()
    )
    by_status = {status: (count, amount) for status, count, amount in rows}

    summary = {}
    grand_total = Decimal("0")
    for status in PaymentStatus:
        count, amount = by_status.get(status, (0, None))
        amount = Decimal(amount) if amount is not None else Decimal("0")
        summary[status.value] = {"order_count": count, "amount": amount}
        grand_total += amount

    summary["total_amount"] = grand_total
    return summary
