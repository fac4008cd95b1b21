from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from freshbox.crud import catalog as crud_catalog
from freshbox.db.deps import get_db
from freshbox.models.catalog import ProductCategory
from freshbox.schemas.catalog import (
    BoxTypeCreate, BoxTypeOut, BoxTypeUpdate,
    ProductCreate, ProductOut, ProductUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Box types
@router.get("/box-types", response_model=List[BoxTypeOut])
def list_box_types(db: Session = Depends(get_db)):
    try:
        return crud_catalog.get_box_types(db)
    except SQLAlchemyError as e:
        logger.error(f"Box type fetch failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch box types")

@router.post("/box-types", response_model=BoxTypeOut, status_code=status.HTTP_201_CREATED)
def create_box_type(data: BoxTypeCreate, db: Session = Depends(get_db)):
    try:
        return crud_catalog.create_box_type(db, data)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Box type creation failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to create box type")

@router.put("/box-types/{box_type_id}", response_model=BoxTypeOut)
def update_box_type(box_type_id: int, data: BoxTypeUpdate, db: Session = Depends(get_db)):
    box_type = crud_catalog.update_box_type(db, box_type_id, data)
    if not box_type:
        raise HTTPException(status_code=404, detail="Box type not found")
    return box_type

# Products
@router.get("/products", response_model=List[ProductOut])
def list_products(
    category: Optional[ProductCategory] = Query(default=None),
    available: Optional[bool] = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        return crud_catalog.get_products(db, category=category, available=available)
    except SQLAlchemyError as e:
        logger.error(f"Product fetch failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch products")

@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    product = crud_catalog.get_product_by_id(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

@router.post("/products", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(data: ProductCreate, db: Session = Depends(get_db)):
    try:
        return crud_catalog.create_product(db, data)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Product creation failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to create product")

@router.put("/products/{product_id}", response_model=ProductOut)
def update_product(product_id: int, data: ProductUpdate, db: Session = Depends(get_db)):
    product = crud_catalog.update_product(db, product_id, data)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

@router.delete("/products/{product_id}")
def delete_product(product_id: int, db: Session = Depends(get_db)):
    try:
        deleted = crud_catalog.delete_product(db, product_id)
    except IntegrityError:
        # Still referenced by order items
        db.rollback()
        raise HTTPException(status_code=400, detail="Failed to delete product")

    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")
    return {"message": "Product deleted successfully"}
