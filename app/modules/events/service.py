import logging
from typing import List, Optional

from postgrest.exceptions import APIError
from supabase import Client

from app.config import settings
from app.core.errors import NotFoundError, ValidationError, upstream_error
from app.modules.events.schemas import EventCreate, EventUpdate, EventResponse
from app.modules.notifications.service import NotificationService

logger = logging.getLogger(__name__)


def normalize_event_time(event_time: Optional[str]) -> Optional[str]:
    """Store times as HH:MM:SS; an HH:MM value gets seconds appended."""
    if event_time is not None and len(event_time) == 5:
        return f"{event_time}:00"
    return event_time


class EventService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.table = settings.events_table

    def create_event(self, event_data: EventCreate) -> EventResponse:
        """Create a new event"""
        logger.info(
            f"Creating event name={event_data.event_name!r} "
            f"date={event_data.event_date!r} time={event_data.event_time!r}"
        )
        if not event_data.event_name or not event_data.event_date or not event_data.event_time:
            raise ValidationError("event_name, event_date, and event_time are required")

        try:
            result = self.supabase.table(self.table).insert({
                "event_name": event_data.event_name,
                "event_date": event_data.event_date,
                "event_time": normalize_event_time(event_data.event_time),
            }).execute()
        except APIError as e:
            logger.error(f"Supabase insert error: {e.message}")
            raise upstream_error(e)

        return EventResponse(**result.data[0])

    def list_events(self) -> List[EventResponse]:
        try:
            result = self.supabase.table(self.table).select("*").execute()
        except APIError as e:
            raise upstream_error(e)
        return [EventResponse(**row) for row in result.data]

    def search_events(self, query: str) -> List[EventResponse]:
        """Case-insensitive substring match on event_name"""
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .ilike("event_name", f"%{query}%")\
                .execute()
        except APIError as e:
            logger.error(f"Event search failed: {e.message}")
            raise upstream_error(e)
        return [EventResponse(**row) for row in result.data]

    def get_event_by_id(self, event_id: str) -> EventResponse:
        """Get event by ID"""
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .eq("id", event_id)\
                .maybe_single()\
                .execute()
        except APIError:
            raise NotFoundError("Event not found")

        if not result or not result.data:
            raise NotFoundError("Event not found")
        return EventResponse(**result.data)

    def update_event(self, event_id: str, event_data: EventUpdate) -> EventResponse:
        """Update the supplied fields; event_time is normalized like on create"""
        update_data = event_data.model_dump(exclude_unset=True)
        if "event_time" in update_data:
            update_data["event_time"] = normalize_event_time(update_data["event_time"])

        if not update_data:
            # No changes, return existing
            return self.get_event_by_id(event_id)

        try:
            result = self.supabase.table(self.table)\
                .update(update_data)\
                .eq("id", event_id)\
                .execute()
        except APIError as e:
            raise upstream_error(e)

        if not result.data:
            raise NotFoundError("Event not found")
        return EventResponse(**result.data[0])

    def delete_event(self, event_id: str) -> None:
        """Delete event together with its contact selections"""
        NotificationService(self.supabase).delete_for_event(event_id)
        try:
            self.supabase.table(self.table).delete().eq("id", event_id).execute()
        except APIError as e:
            raise upstream_error(e)
