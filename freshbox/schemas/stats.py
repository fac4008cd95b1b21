from freshbox.schemas.common import CamelModel, Money

class OrderStats(CamelModel):
    total_orders: int
    total_revenue: str  # "0" when there are no orders
    total_customers: int
    total_products: int

class BillingBucket(CamelModel):
    order_count: int
    amount: Money

class BillingSummary(CamelModel):
    pending: BillingBucket
    completed: BillingBucket
    failed: BillingBucket
    total_amount: Money
