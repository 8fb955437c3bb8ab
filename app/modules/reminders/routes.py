from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.messaging.sms_client import SmsGateway, get_sms_gateway
from app.core.schemas import DataResponse
from app.modules.reminders.schemas import SendMessageRequest, DeliveryResult
from app.modules.reminders.service import ReminderService
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/send-message", tags=["reminders"])


def get_reminder_service(
    supabase: Client = Depends(get_supabase),
    sms: SmsGateway = Depends(get_sms_gateway),
) -> ReminderService:
    return ReminderService(supabase, sms)


@router.post("", response_model=DataResponse[List[DeliveryResult]], response_model_exclude_none=True)
async def send_reminders(
    request: Optional[SendMessageRequest] = None,
    service: ReminderService = Depends(get_reminder_service)
):
    """Send an SMS reminder for an event to every linked contact; per-recipient outcomes in `data`"""
    event_id = request.event_id if request else None
    return DataResponse(data=await service.dispatch(event_id))
