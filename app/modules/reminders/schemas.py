from pydantic import BaseModel
from typing import Optional, Union


class SendMessageRequest(BaseModel):
    event_id: Optional[Union[int, str]] = None


class DeliveryResult(BaseModel):
    """Outcome of one outbound SMS."""
    to: Optional[str] = None
    status: str  # sent | failed
    error: Optional[str] = None
