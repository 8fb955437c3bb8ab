from pydantic import BaseModel
from typing import Optional, Union
from datetime import datetime


class ContactCreate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None


class ContactUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None


class ContactResponse(BaseModel):
    id: Union[int, str]
    name: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
