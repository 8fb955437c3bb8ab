import logging
from typing import Any, List

from postgrest.exceptions import APIError
from pydantic import ValidationError as PydanticValidationError
from supabase import Client

from app.config import settings
from app.core.errors import ValidationError, upstream_error
from app.modules.notifications.schemas import (
    SelectionCreate, SelectionResponse, SelectionWithContact, SelectionWithEvent, ContactSelection
)

logger = logging.getLogger(__name__)


class NotificationService:
    """Contact <-> event links ("selected for this event")."""

    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.table = settings.notifications_table

    @staticmethod
    def _row(entry: SelectionCreate) -> dict:
        if not entry.contact_id or not entry.event_id:
            raise ValidationError("Missing contact_id or event_id")
        return {
            "contact_id": entry.contact_id,
            "event_id": entry.event_id,
            "is_selected": entry.is_selected if entry.is_selected is not None else False,
        }

    def create_one(self, entry: SelectionCreate) -> SelectionResponse:
        row = self._row(entry)
        try:
            result = self.supabase.table(self.table).insert(row).execute()
        except APIError as e:
            raise upstream_error(e)
        return SelectionResponse(**result.data[0])

    def create_bulk(self, entries: Any) -> List[SelectionResponse]:
        """Insert many links in one batch; nothing is inserted if any entry is invalid"""
        if not isinstance(entries, list) or len(entries) == 0:
            raise ValidationError("Invalid input: expected array")

        rows = []
        for entry in entries:
            try:
                parsed = SelectionCreate.model_validate(entry)
            except PydanticValidationError:
                raise ValidationError("Invalid input: expected array of {contact_id, event_id, is_selected?}")
            rows.append(self._row(parsed))

        try:
            result = self.supabase.table(self.table).insert(rows).execute()
        except APIError as e:
            logger.error(f"Bulk insert of {len(rows)} links failed: {e.message}")
            raise upstream_error(e)
        return [SelectionResponse(**row) for row in result.data]

    def list_all(self) -> List[SelectionResponse]:
        try:
            result = self.supabase.table(self.table).select("*").execute()
        except APIError as e:
            raise upstream_error(e)
        return [SelectionResponse(**row) for row in result.data]

    def list_with_selection_flag_by_event(self, event_id: str) -> List[ContactSelection]:
        """Every contact, flagged with whether it is linked to the event"""
        try:
            contacts_result = self.supabase.table(settings.contacts_table)\
                .select("id, name, phone")\
                .execute()
            links_result = self.supabase.table(self.table)\
                .select("contact_id")\
                .eq("event_id", event_id)\
                .execute()
        except APIError as e:
            logger.error(f"Fetch error: {e.message}")
            raise upstream_error(e)

        selected_ids = {str(link["contact_id"]) for link in links_result.data}
        return [
            ContactSelection(**contact, is_selected=str(contact["id"]) in selected_ids)
            for contact in contacts_result.data
        ]

    def list_by_event(self, event_id: str) -> List[SelectionWithContact]:
        """Links recorded for the event, with contact name/phone embedded"""
        try:
            result = self.supabase.table(self.table)\
                .select(f"*, contact:{settings.contacts_table}(name, phone)")\
                .eq("event_id", event_id)\
                .execute()
        except APIError as e:
            raise upstream_error(e)
        return [SelectionWithContact(**row) for row in result.data]

    def list_by_contact(self, contact_id: str) -> List[SelectionWithEvent]:
        """Links recorded for the contact, with event fields embedded"""
        try:
            result = self.supabase.table(self.table)\
                .select(f"*, event:{settings.events_table}(event_name, event_date, event_time)")\
                .eq("contact_id", contact_id)\
                .execute()
        except APIError as e:
            raise upstream_error(e)
        return [SelectionWithEvent(**row) for row in result.data]

    def get_contact_ids_for_event(self, event_id: str) -> List[Any]:
        """contact_id of every link for the event, duplicates kept"""
        result = self.supabase.table(self.table)\
            .select("contact_id")\
            .eq("event_id", event_id)\
            .execute()
        return [link["contact_id"] for link in (result.data or [])]

    def delete_by_pair(self, contact_id: Any, event_id: Any) -> None:
        """Remove every link between the contact and the event"""
        if not contact_id or not event_id:
            raise ValidationError("Missing contact_id or event_id")
        try:
            self.supabase.table(self.table)\
                .delete()\
                .eq("contact_id", contact_id)\
                .eq("event_id", event_id)\
                .execute()
        except APIError as e:
            logger.error(f"Failed to remove notification link: {e.message}")
            raise upstream_error(e)

    def delete_by_id(self, notification_id: str) -> None:
        try:
            self.supabase.table(self.table).delete().eq("id", notification_id).execute()
        except APIError as e:
            raise upstream_error(e)

    def delete_for_contact(self, contact_id: str) -> None:
        try:
            self.supabase.table(self.table).delete().eq("contact_id", contact_id).execute()
        except APIError as e:
            raise upstream_error(e)

    def delete_for_event(self, event_id: str) -> None:
        try:
            self.supabase.table(self.table).delete().eq("event_id", event_id).execute()
        except APIError as e:
            raise upstream_error(e)
