from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.core.schemas import DataResponse, MessageResponse
from app.modules.events.schemas import EventCreate, EventUpdate, EventResponse
from app.modules.events.service import EventService
from supabase import Client
from typing import List

router = APIRouter(prefix="/events", tags=["events"])


def get_event_service(supabase: Client = Depends(get_supabase)) -> EventService:
    return EventService(supabase)


@router.post("", response_model=DataResponse[EventResponse], status_code=201)
async def create_event(
    event_data: EventCreate,
    service: EventService = Depends(get_event_service)
):
    """Create a new event; HH:MM times are stored as HH:MM:SS"""
    return DataResponse(data=service.create_event(event_data))


@router.get("", response_model=DataResponse[List[EventResponse]])
async def list_events(service: EventService = Depends(get_event_service)):
    return DataResponse(data=service.list_events())


@router.get("/search/{query}", response_model=DataResponse[List[EventResponse]])
async def search_events(
    query: str,
    service: EventService = Depends(get_event_service)
):
    """Search events by name (partial match, case-insensitive)"""
    return DataResponse(data=service.search_events(query))


@router.get("/{event_id}", response_model=DataResponse[EventResponse])
async def get_event(
    event_id: str,
    service: EventService = Depends(get_event_service)
):
    return DataResponse(data=service.get_event_by_id(event_id))


@router.put("/{event_id}", response_model=DataResponse[EventResponse])
async def update_event(
    event_id: str,
    event_data: EventUpdate,
    service: EventService = Depends(get_event_service)
):
    return DataResponse(data=service.update_event(event_id, event_data))


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: str,
    service: EventService = Depends(get_event_service)
):
    """Delete event and its contact selections"""
    service.delete_event(event_id)
    return MessageResponse(message="Event deleted")
