from pydantic import Field
from typing import Any, Dict, Optional
from freshbox.models.catalog import ProductCategory
from freshbox.schemas.common import CamelModel, Money

# 👇 Box types
class BoxTypeBase(CamelModel):
    name: str = Field(min_length=1)
    price: Money = Field(ge=0, decimal_places=2)
    items_limit: int = Field(ge=0)
    description: Optional[str] = None
    is_active: bool = True

class BoxTypeCreate(BoxTypeBase):
    pass

class BoxTypeUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[Money] = Field(default=None, ge=0, decimal_places=2)
    items_limit: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = None
    is_active: Optional[bool] = None

class BoxTypeOut(BoxTypeBase):
    id: int

# 👇 Products
class ProductBase(CamelModel):
    name: str = Field(min_length=1)
    category: ProductCategory
    price: Money = Field(ge=0, decimal_places=2)
    unit: str = Field(min_length=1)
    image_url: Optional[str] = None
    description: Optional[str] = None
    is_available: bool = True
    nutrition_info: Optional[Dict[str, Any]] = None

class ProductCreate(ProductBase):
    pass

class ProductUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[ProductCategory] = None
    price: Optional[Money] = Field(default=None, ge=0, decimal_places=2)
    unit: Optional[str] = Field(default=None, min_length=1)
    image_url: Optional[str] = None
    description: Optional[str] = None
    is_available: Optional[bool] = None
    nutrition_info: Optional[Dict[str, Any]] = None

class ProductOut(ProductBase):
    id: int
