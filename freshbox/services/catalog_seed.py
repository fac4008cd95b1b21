# freshbox/services/catalog_seed.py
import logging
from sqlalchemy.orm import Session
from freshbox.crud import catalog as crud_catalog
from freshbox.models.catalog import BoxType, Product
from freshbox.schemas.catalog import BoxTypeCreate, ProductCreate

logger = logging.getLogger(__name__)

DEFAULT_BOX_TYPES = [
    {"name": "Small Box", "price": "799.00", "items_limit": 3,
     "description": "Perfect for 1-2 people, 2-3 premium items"},
    {"name": "Medium Box", "price": "1399.00", "items_limit": 6,
     "description": "Great for families, 4-6 premium items"},
    {"name": "Large Box", "price": "1999.00", "items_limit": 10,
     "description": "Perfect for large families, 7-10 premium items"},
]

DEFAULT_PRODUCTS = [
    # Fruits
    {"name": "Fresh Apples", "category": "fruit", "price": "150.00", "unit": "kg", "description": "Sweet and crispy red apples"},
    {"name": "Bananas", "category": "fruit", "price": "80.00", "unit": "dozen", "description": "Fresh yellow bananas"},
    {"name": "Oranges", "category": "fruit", "price": "120.00", "unit": "kg", "description": "Juicy Valencia oranges"},
    {"name": "Mangoes", "category": "fruit", "price": "200.00", "unit": "kg", "description": "Sweet Pakistani mangoes"},
    {"name": "Grapes", "category": "fruit", "price": "180.00", "unit": "kg", "description": "Fresh green grapes"},
    # Vegetables
    {"name": "Tomatoes", "category": "vegetable", "price": "60.00", "unit": "kg", "description": "Fresh red tomatoes"},
    {"name": "Onions", "category": "vegetable", "price": "40.00", "unit": "kg", "description": "Fresh white onions"},
    {"name": "Potatoes", "category": "vegetable", "price": "35.00", "unit": "kg", "description": "Fresh potatoes"},
    {"name": "Carrots", "category": "vegetable", "price": "70.00", "unit": "kg", "description": "Fresh orange carrots"},
    {"name": "Spinach", "category": "vegetable", "price": "30.00", "unit": "bunch", "description": "Fresh green spinach"},
    {"name": "Lettuce", "category": "vegetable", "price": "45.00", "unit": "head", "description": "Fresh iceberg lettuce"},
    {"name": "Bell Peppers", "category": "vegetable", "price": "90.00", "unit": "kg", "description": "Fresh colorful bell peppers"},
]


def seed_default_catalog(db: Session) -> None:
    """Fill empty box type / product tables with the starter catalog."""
    if db.query(BoxType).count() == 0:
        for box in DEFAULT_BOX_TYPES:
            crud_catalog.create_box_type(db, BoxTypeCreate(**box))
        logger.info(f"Seeded {len(DEFAULT_BOX_TYPES)} box types")

    if db.query(Product).count() == 0:
        for product in DEFAULT_PRODUCTS:
            crud_catalog.create_product(db, ProductCreate(**product))
        logger.info(f"Seeded {len(DEFAULT_PRODUCTS)} products")
