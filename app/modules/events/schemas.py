from pydantic import BaseModel
from typing import Optional, Union


class EventCreate(BaseModel):
    event_name: Optional[str] = None
    event_date: Optional[str] = None  # YYYY-MM-DD
    event_time: Optional[str] = None  # HH:MM or HH:MM:SS


class EventUpdate(BaseModel):
    event_name: Optional[str] = None
    event_date: Optional[str] = None
    event_time: Optional[str] = None


class EventResponse(BaseModel):
    id: Union[int, str]
    event_name: Optional[str] = None
    event_date: Optional[str] = None
    event_time: Optional[str] = None

    class Config:
        from_attributes = True
