import asyncio
import logging
from typing import Any, Dict, List

from postgrest.exceptions import APIError
from supabase import Client

from app.config import settings
from app.core.errors import UpstreamError, ValidationError
from app.messaging.sms_client import SmsGateway
from app.modules.notifications.service import NotificationService
from app.modules.reminders.schemas import DeliveryResult

logger = logging.getLogger(__name__)


def build_reminder_message(event: Dict[str, Any]) -> str:
    return f'Reminder: "{event["event_name"]}" on {event["event_date"]} at {event["event_time"]}'


class ReminderService:
    def __init__(self, supabase: Client, sms: SmsGateway):
        self.supabase = supabase
        self.sms = sms

    def _load_event(self, event_id: Any) -> Dict[str, Any]:
        try:
            result = self.supabase.table(settings.events_table)\
                .select("event_name, event_date, event_time")\
                .eq("id", event_id)\
                .maybe_single()\
                .execute()
        except APIError as e:
            logger.error(f"Failed to fetch event {event_id}: {e.message}")
            raise UpstreamError("Failed to fetch event")
        if not result or not result.data:
            raise UpstreamError("Failed to fetch event")
        return result.data

    def _load_recipients(self, event_id: Any) -> List[Dict[str, Any]]:
        """One contact per link; a contact linked twice appears twice"""
        try:
            contact_ids = NotificationService(self.supabase).get_contact_ids_for_event(event_id)
        except APIError as e:
            logger.error(f"Failed to fetch notifications for event {event_id}: {e.message}")
            raise UpstreamError("Failed to fetch notifications")

        if not contact_ids:
            raise ValidationError("No contacts linked to this event")

        try:
            result = self.supabase.table(settings.contacts_table)\
                .select("id, phone")\
                .in_("id", list(dict.fromkeys(contact_ids)))\
                .execute()
        except APIError as e:
            logger.error(f"Failed to fetch contacts for event {event_id}: {e.message}")
            raise UpstreamError("Failed to fetch contacts")

        contacts_by_id = {str(c["id"]): c for c in result.data}
        return [contacts_by_id[str(cid)] for cid in contact_ids if str(cid) in contacts_by_id]

    async def _send_one(self, to_phone: str, body: str) -> DeliveryResult:
        try:
            await asyncio.to_thread(self.sms.send_sms, to_phone, body)
        except Exception as e:
            logger.warning(f"SMS to {to_phone} failed: {e}")
            return DeliveryResult(to=to_phone, status="failed", error=str(e))
        return DeliveryResult(to=to_phone, status="sent")

    async def dispatch(self, event_id: Any) -> List[DeliveryResult]:
        """Text a reminder for the event to every linked contact.

        Sends run concurrently and each outcome is reported separately; a
        failed send never aborts the others.
        """
        if not event_id:
            raise ValidationError("Missing event_id")

        event = self._load_event(event_id)
        recipients = self._load_recipients(event_id)
        body = build_reminder_message(event)

        results = await asyncio.gather(*(self._send_one(c["phone"], body) for c in recipients))
        sent = sum(1 for r in results if r.status == "sent")
        logger.info(f"Reminder for event {event_id}: {sent}/{len(results)} sent")
        return list(results)
