from pydantic import BaseModel
from typing import Optional, Union

Id = Union[int, str]


class SelectionCreate(BaseModel):
    contact_id: Optional[Id] = None
    event_id: Optional[Id] = None
    is_selected: Optional[bool] = None


class SelectionPair(BaseModel):
    contact_id: Optional[Id] = None
    event_id: Optional[Id] = None


class SelectionResponse(BaseModel):
    id: Id
    contact_id: Optional[Id] = None
    event_id: Optional[Id] = None
    is_selected: bool = False

    class Config:
        from_attributes = True


class ContactSummary(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None


class EventSummary(BaseModel):
    event_name: Optional[str] = None
    event_date: Optional[str] = None
    event_time: Optional[str] = None


class SelectionWithContact(SelectionResponse):
    contact: Optional[ContactSummary] = None


class SelectionWithEvent(SelectionResponse):
    event: Optional[EventSummary] = None


class ContactSelection(BaseModel):
    """A contact flagged with whether it is linked to a given event."""
    id: Id
    name: Optional[str] = None
    phone: Optional[str] = None
    is_selected: bool
