from typing import Optional
from freshbox.schemas.common import CamelModel, Money

class PaymentRequest(CamelModel):
    order_id: int
    amount: Optional[Money] = None
    phone: Optional[str] = None

class PaymentResponse(CamelModel):
    success: bool
    transaction_id: str
    message: str
