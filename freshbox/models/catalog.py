from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, Enum, JSON
from sqlalchemy.orm import relationship
from freshbox.db.session import Base
import enum

class ProductCategory(str, enum.Enum):
    fruit = "fruit"
    vegetable = "vegetable"

class BoxType(Base):
    __tablename__ = "box_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    items_limit = Column(Integer, nullable=False)  # not enforced at checkout
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    orders = relationship("Order", back_populates="box_type")


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    category = Column(Enum(ProductCategory, native_enum=False, length=20), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    unit = Column(String, nullable=False)  # kg, piece, bunch
    image_url = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)
    nutrition_info = Column(JSON, nullable=True)
