from sqlalchemy import Column, Integer, String, Text, ForeignKey, Numeric, Enum, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from freshbox.db.session import Base
import enum

class OrderStatus(str, enum.Enum):
    processing = "processing"
    confirmed = "confirmed"
    delivered = "delivered"
    cancelled = "cancelled"

class PaymentStatus(str, enum.Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"

class PaymentMethod(str, enum.Enum):
    easypaisa = "easypaisa"
    jazzcash = "jazzcash"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    box_type_id = Column(Integer, ForeignKey("box_types.id"), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    # Stored as plain strings so legacy text columns keep working
    payment_method = Column(Enum(PaymentMethod, native_enum=False, length=20), nullable=False)
    payment_status = Column(Enum(PaymentStatus, native_enum=False, length=20), nullable=False, default=PaymentStatus.pending)
    order_status = Column(Enum(OrderStatus, native_enum=False, length=20), nullable=False, default=OrderStatus.processing)
    delivery_date = Column(DateTime(timezone=True), nullable=True)
    special_instructions = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    customer = relationship("Customer", back_populates="orders")
    box_type = relationship("BoxType", back_populates="orders")
    order_items = relationship("OrderItem", back_populates="order", order_by="OrderItem.id")


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Numeric(8, 2), nullable=False)
    # Snapshot of the price the customer saw; never recomputed
    unit_price = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="order_items")
    product = relationship("Product")
