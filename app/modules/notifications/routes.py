from fastapi import APIRouter, Body, Depends
from app.database.supabase_client import get_supabase
from app.core.schemas import DataResponse, MessageResponse
from app.modules.notifications.schemas import (
    SelectionCreate, SelectionPair, SelectionResponse, SelectionWithContact, SelectionWithEvent, ContactSelection
)
from app.modules.notifications.service import NotificationService
from supabase import Client
from typing import Any, List, Optional

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_notification_service(supabase: Client = Depends(get_supabase)) -> NotificationService:
    return NotificationService(supabase)


@router.post("", response_model=DataResponse[SelectionResponse])
async def create_notification(
    entry: SelectionCreate,
    service: NotificationService = Depends(get_notification_service)
):
    """Link a contact to an event (is_selected defaults to false)"""
    return DataResponse(data=service.create_one(entry))


@router.post("/bulk", response_model=DataResponse[List[SelectionResponse]])
async def create_notifications_bulk(
    entries: Any = Body(None),
    service: NotificationService = Depends(get_notification_service)
):
    """Link many contact-event pairs at once; body is a JSON array"""
    return DataResponse(data=service.create_bulk(entries))


@router.get("", response_model=DataResponse[List[SelectionResponse]])
async def list_notifications(service: NotificationService = Depends(get_notification_service)):
    return DataResponse(data=service.list_all())


@router.get("/event/{event_id}", response_model=DataResponse[List[SelectionWithContact]])
async def list_notifications_for_event(
    event_id: str,
    service: NotificationService = Depends(get_notification_service)
):
    """Links recorded for an event, with the linked contact's name and phone"""
    return DataResponse(data=service.list_by_event(event_id))


@router.get("/event/{event_id}/contacts", response_model=DataResponse[List[ContactSelection]])
async def list_contacts_with_selection(
    event_id: str,
    service: NotificationService = Depends(get_notification_service)
):
    """All contacts, each marked whether it is selected for the event"""
    return DataResponse(data=service.list_with_selection_flag_by_event(event_id))


@router.get("/contact/{contact_id}", response_model=DataResponse[List[SelectionWithEvent]])
async def list_notifications_for_contact(
    contact_id: str,
    service: NotificationService = Depends(get_notification_service)
):
    """Links recorded for a contact, with the linked event's fields"""
    return DataResponse(data=service.list_by_contact(contact_id))


@router.delete("", response_model=MessageResponse)
async def delete_notification_pair(
    pair: Optional[SelectionPair] = None,
    service: NotificationService = Depends(get_notification_service)
):
    """Delete a contact-event relation"""
    pair = pair or SelectionPair()
    service.delete_by_pair(pair.contact_id, pair.event_id)
    return MessageResponse(message="Notification relation deleted")


@router.delete("/deselect", response_model=MessageResponse)
async def deselect_contact(
    pair: Optional[SelectionPair] = None,
    service: NotificationService = Depends(get_notification_service)
):
    """Deselect a contact from an event"""
    pair = pair or SelectionPair()
    service.delete_by_pair(pair.contact_id, pair.event_id)
    return MessageResponse(message="Contact deselected for this event")


@router.delete("/notifications/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service)
):
    service.delete_by_id(notification_id)
    return MessageResponse(message="Deleted successfully")
