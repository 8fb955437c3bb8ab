import logging
from typing import List, Optional

from postgrest.exceptions import APIError
from supabase import Client

from app.config import settings
from app.core.errors import NotFoundError, ValidationError, upstream_error
from app.modules.contacts.schemas import ContactCreate, ContactUpdate, ContactResponse
from app.modules.notifications.service import NotificationService

logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.table = settings.contacts_table

    def create_contact(self, contact_data: ContactCreate) -> ContactResponse:
        """Create a new contact"""
        if not contact_data.name or not contact_data.phone:
            raise ValidationError("Missing required fields")
        try:
            result = self.supabase.table(self.table).insert({
                "name": contact_data.name,
                "phone": contact_data.phone,
            }).execute()
        except APIError as e:
            logger.error(f"Supabase insert error: {e.message}")
            raise upstream_error(e)

        return ContactResponse(**result.data[0])

    def list_contacts(self, search: Optional[str] = None) -> List[ContactResponse]:
        """List contacts by name, optionally filtered by a name/phone substring"""
        query = self.supabase.table(self.table).select("*")
        if search and search.strip():
            query = query.or_(f"name.ilike.%{search}%,phone.ilike.%{search}%")
        try:
            result = query.order("name", desc=False).execute()
        except APIError as e:
            raise upstream_error(e)

        return [ContactResponse(**row) for row in result.data]

    def get_contact_by_id(self, contact_id: str) -> ContactResponse:
        """Get contact by ID"""
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .eq("id", contact_id)\
                .maybe_single()\
                .execute()
        except APIError:
            # malformed ids are reported as a miss
            raise NotFoundError("Contact not found")

        if not result or not result.data:
            raise NotFoundError("Contact not found")
        return ContactResponse(**result.data)

    def update_contact(self, contact_id: str, contact_data: ContactUpdate) -> ContactResponse:
        """Overwrite name and phone; fields left out of the body are written as null"""
        try:
            result = self.supabase.table(self.table)\
                .update({"name": contact_data.name, "phone": contact_data.phone})\
                .eq("id", contact_id)\
                .execute()
        except APIError as e:
            raise upstream_error(e)

        if not result.data:
            raise NotFoundError("Contact not found")
        return ContactResponse(**result.data[0])

    def delete_contact(self, contact_id: str) -> None:
        """Delete contact together with its event selections. Missing ids are not an error."""
        NotificationService(self.supabase).delete_for_contact(contact_id)
        try:
            self.supabase.table(self.table).delete().eq("id", contact_id).execute()
        except APIError as e:
            raise upstream_error(e)
