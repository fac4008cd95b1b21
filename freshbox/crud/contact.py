from typing import List, Optional
from sqlalchemy.orm import Session
from freshbox.models.contact import ContactMessage
from freshbox.schemas.contact import ContactMessageCreate

def create_contact_message(db: Session, data: ContactMessageCreate) -> ContactMessage:
    message = ContactMessage(**data.model_dump(), is_replied=False)
    db.add(message)
    db.commit()
    db.refresh(message)
    return message

def get_contact_messages(db: Session) -> List[ContactMessage]:
    return db.query(ContactMessage).order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc()).all()

def mark_message_as_replied(db: Session, message_id: int) -> Optional[ContactMessage]:
    message = db.query(ContactMessage).filter(ContactMessage.id == message_id).first()
    if not message:
        return None
    message.is_replied = True
    db.commit()
    db.refresh(message)
    return message
