from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List
import logging

from freshbox.core.rate_limiter import limit_public_writes
from freshbox.crud import contact as crud_contact
from freshbox.db.deps import get_db
from freshbox.schemas.contact import ContactMessageCreate, ContactMessageOut

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post(
    "",
    response_model=ContactMessageOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(limit_public_writes)],
)
def create_contact_message(data: ContactMessageCreate, db: Session = Depends(get_db)):
    try:
        return crud_contact.create_contact_message(db, data)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Contact message creation failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to create contact message")

@router.get("", response_model=List[ContactMessageOut])
def list_contact_messages(db: Session = Depends(get_db)):
    try:
        return crud_contact.get_contact_messages(db)
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Failed to fetch contact messages")

@router.put("/{message_id}/replied", response_model=ContactMessageOut)
def mark_replied(message_id: int, db: Session = Depends(get_db)):
    message = crud_contact.mark_message_as_replied(db, message_id)
    if not message:
        raise HTTPException(status_code=404, detail="Contact message not found")
    return message
