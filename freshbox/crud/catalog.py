from typing import Optional, List
from sqlalchemy.orm import Session
from freshbox.models.catalog import BoxType, Product, ProductCategory
from freshbox.schemas.catalog import BoxTypeCreate, BoxTypeUpdate, ProductCreate, ProductUpdate

#  Box types
def get_box_types(db: Session) -> List[BoxType]:
    return (
        db.query(BoxType)
        .filter(BoxType.is_active.is_(True))
        .order_by(BoxType.price, BoxType.id)
        .all()
    )

def get_box_type_by_id(db: Session, box_type_id: int) -> Optional[BoxType]:
    return db.query(BoxType).filter(BoxType.id == box_type_id).first()

def create_box_type(db: Session, data: BoxTypeCreate) -> BoxType:
    box_type = BoxType(**data.model_dump())
    db.add(box_type)
    db.commit()
    db.refresh(box_type)
    return box_type

def update_box_type(db: Session, box_type_id: int, data: BoxTypeUpdate) -> Optional[BoxType]:
    box_type = get_box_type_by_id(db, box_type_id)
    if not box_type:
        return None

    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(box_type, key, value)

    db.commit()
    db.refresh(box_type)
    return box_type

#  Products
def get_products(
    db: Session,
    category: Optional[ProductCategory] = None,
    available: Optional[bool] = None,
) -> List[Product]:
    query = db.query(Product)
    if category is not None:
        query = query.filter(Product.category == category)
    if available is not None:
        query = query.filter(Product.is_available.is_(available))
    return query.order_by(Product.category, Product.name).all()

def get_product_by_id(db: Session, product_id: int) -> Optional[Product]:
    return db.query(Product).filter(Product.id == product_id).first()

def get_existing_product_ids(db: Session, product_ids: List[int]) -> set:
    rows = db.query(Product.id).filter(Product.id.in_(product_ids)).all()
    return {row.id for row in rows}

def count_products(db: Session) -> int:
    return db.query(Product).count()

def create_product(db: Session, data: ProductCreate) -> Product:
    product = Product(**data.model_dump())
    db.add(product)
    db.commit()
    db.refresh(product)
    return product

def update_product(db: Session, product_id: int, data: ProductUpdate) -> Optional[Product]:
    product = get_product_by_id(db, product_id)
    if not product:
        return None

    # Past order items keep their own unit_price snapshot
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(product, key, value)

    db.commit()
    db.refresh(product)
    return product

def delete_product(db: Session, product_id: int) -> bool:
    product = get_product_by_id(db, product_id)
    if not product:
        return False

    db.delete(product)
    db.commit()
    return True
