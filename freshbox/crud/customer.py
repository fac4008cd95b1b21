import logging
from typing import Optional
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from freshbox.models.customer import Customer
from freshbox.schemas.order import CustomerIn

logger = logging.getLogger(__name__)

_CONFLICT_AWARE_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}

def get_customer_by_email(db: Session, email: str) -> Optional[Customer]:
    return db.query(Customer).filter(Customer.email == email).first()

def count_customers(db: Session) -> int:
    return db.query(Customer).count()

def get_or_create_customer(db: Session, data: CustomerIn) -> Customer:
    """
    Insert the customer unless the email is already taken, then load the row.

    Runs inside the caller's transaction and does not commit. Two concurrent
    checkouts with the same new email both end up with the single row the
    unique index allows.
    """
    values = data.model_dump()
    insert = _CONFLICT_AWARE_INSERTS.get(db.get_bind().dialect.name)

    if insert is not None:
        stmt = insert(Customer).values(**values).on_conflict_do_nothing(index_elements=["email"])
        db.execute(stmt)
    else:
        try:
            with db.begin_nested():
                db.add(Customer(**values))
        except IntegrityError:
            logger.info(f"Customer {data.email} already exists, reusing it")

    return get_customer_by_email(db, data.email)
