import logging
from typing import Optional

from twilio.rest import Client

from app.config import settings

logger = logging.getLogger(__name__)


class SmsGateway:
    """Thin wrapper around the Twilio client used by the reminder dispatcher."""

    def __init__(self, account_sid: Optional[str], auth_token: Optional[str], from_number: Optional[str]):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self._client: Optional[Client] = None

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = Client(self.account_sid, self.auth_token)
        return self._client

    def send_sms(self, to_phone: str, body: str) -> str:
        """Send one SMS and return its SID. Raises on any gateway failure."""
        if not self.from_number:
            raise RuntimeError("SMS sender number is not configured")
        message = self.client.messages.create(to=to_phone, from_=self.from_number, body=body)
        logger.debug(f"SMS {message.sid} queued for {to_phone}")
        return message.sid


class SmsClient:
    _gateway: SmsGateway = None

    @classmethod
    def get_gateway(cls) -> SmsGateway:
        if cls._gateway is None:
            cls._gateway = SmsGateway(
                settings.twilio_account_sid,
                settings.twilio_auth_token,
                settings.twilio_from_number,
            )
        return cls._gateway

    @classmethod
    def reset_gateway(cls):
        cls._gateway = None


def get_sms_gateway() -> SmsGateway:
    return SmsClient.get_gateway()
