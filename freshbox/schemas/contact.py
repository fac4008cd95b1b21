from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime
from freshbox.schemas.common import CamelModel

class ContactMessageCreate(CamelModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)

class ContactMessageOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    is_replied: bool
    created_at: datetime
