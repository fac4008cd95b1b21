from pydantic import EmailStr, Field, field_validator
from typing import List, Optional
from datetime import datetime
from freshbox.core.config import settings
from freshbox.models.order import OrderStatus, PaymentStatus, PaymentMethod
from freshbox.schemas.common import CamelModel, Money
from freshbox.schemas.catalog import BoxTypeOut, ProductOut

class CustomerIn(CamelModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    phone: str
    address: str
    city: str = Field(min_length=1)

    @field_validator("first_name", "last_name", "phone", "address", "city")
    @classmethod
    def strip_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value: str) -> str:
        if len(value) < settings.MIN_PHONE_LENGTH:
            raise ValueError(f"phone must have at least {settings.MIN_PHONE_LENGTH} characters")
        return value

    @field_validator("address")
    @classmethod
    def check_address(cls, value: str) -> str:
        if len(value) < settings.MIN_ADDRESS_LENGTH:
            raise ValueError(f"address must have at least {settings.MIN_ADDRESS_LENGTH} characters")
        return value

class CustomerOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    city: str
    created_at: datetime

class OrderItemCreate(CamelModel):
    product_id: int
    # Two places at most, matching the Numeric columns the total is checked against
    quantity: Money = Field(gt=0, decimal_places=2)
    unit_price: Money = Field(ge=0, decimal_places=2)

class OrderCreate(CamelModel):
    customer: CustomerIn
    box_type_id: int
    # Optional cross-check; the stored total is always computed from the items
    total_amount: Optional[Money] = None
    payment_method: PaymentMethod
    delivery_date: Optional[datetime] = None
    special_instructions: Optional[str] = None
    items: List[OrderItemCreate] = Field(min_length=1)

class OrderItemOut(CamelModel):
    id: int
    order_id: int
    product_id: int
    quantity: Money
    unit_price: Money

class OrderItemDetailOut(OrderItemOut):
    product: ProductOut

class OrderOut(CamelModel):
    id: int
    customer_id: int
    box_type_id: int
    total_amount: Money
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    order_status: OrderStatus
    delivery_date: Optional[datetime] = None
    special_instructions: Optional[str] = None
    created_at: datetime

class OrderDetailOut(OrderOut):
    customer: CustomerOut
    box_type: BoxTypeOut
    order_items: List[OrderItemDetailOut]

class OrderStatusUpdate(CamelModel):
    status: OrderStatus

class PaymentStatusUpdate(CamelModel):
    status: PaymentStatus

class ReceiptLine(CamelModel):
    product_id: int
    product_name: str
    unit: str
    quantity: Money
    unit_price: Money
    line_total: Money

class ReceiptOut(CamelModel):
    id: int
    order_number: str
    customer: CustomerOut
    box_type: BoxTypeOut
    items: List[ReceiptLine]
    subtotal: Money
    box_price: Money
    total: Money
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    order_date: datetime
    delivery_date: datetime
