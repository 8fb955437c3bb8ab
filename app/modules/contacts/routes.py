from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.core.schemas import DataResponse, MessageResponse
from app.modules.contacts.schemas import ContactCreate, ContactUpdate, ContactResponse
from app.modules.contacts.service import ContactService
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/contacts", tags=["contacts"])


def get_contact_service(supabase: Client = Depends(get_supabase)) -> ContactService:
    return ContactService(supabase)


@router.post("", response_model=DataResponse[ContactResponse])
async def create_contact(
    contact_data: ContactCreate,
    service: ContactService = Depends(get_contact_service)
):
    """Create a new contact"""
    return DataResponse(data=service.create_contact(contact_data))


@router.get("", response_model=DataResponse[List[ContactResponse]])
async def list_contacts(
    search: Optional[str] = None,
    service: ContactService = Depends(get_contact_service)
):
    """List contacts ordered by name; `search` matches name or phone, case-insensitive"""
    return DataResponse(data=service.list_contacts(search))


@router.get("/{contact_id}", response_model=DataResponse[ContactResponse])
async def get_contact(
    contact_id: str,
    service: ContactService = Depends(get_contact_service)
):
    return DataResponse(data=service.get_contact_by_id(contact_id))


@router.put("/{contact_id}", response_model=DataResponse[ContactResponse])
async def update_contact(
    contact_id: str,
    contact_data: ContactUpdate,
    service: ContactService = Depends(get_contact_service)
):
    return DataResponse(data=service.update_contact(contact_id, contact_data))


@router.delete("/{contact_id}", response_model=MessageResponse)
async def delete_contact(
    contact_id: str,
    service: ContactService = Depends(get_contact_service)
):
    """Delete contact and its event selections"""
    service.delete_contact(contact_id)
    return MessageResponse(message="Contact deleted")
