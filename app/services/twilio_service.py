"""
app/services/twilio_service.py

Purpose: Twilio WhatsApp message sending

- Defines the narrow MessagingProvider interface the dispatcher depends on
- Sends WhatsApp messages via the Twilio REST API
- Converts Twilio and transport failures into ProviderError
"""

from abc import ABC, abstractmethod
from typing import Optional

import httpx
from pydantic import BaseModel

from app.core.config import ProviderConfig
from app.core.exceptions import ProviderError
from app.core.logging import get_logger, mask_phone
from utils.whatsapp_utils import strip_whatsapp_prefix

logger = get_logger(__name__)


class SentMessage(BaseModel):
    """Provider acknowledgement of an accepted message."""
    sid: Optional[str] = None
    status: Optional[str] = None


class MessagingProvider(ABC):
    """Outbound single-message delivery."""

    @abstractmethod
    async def send_message(self, from_: str, to: str, body: str) -> SentMessage:
        """
        Sends one message.

        Raises:
            ProviderError: with the provider's human-readable message
        """
        raise NotImplementedError


class TwilioService(MessagingProvider):
    """Service for sending WhatsApp messages via Twilio"""

    def __init__(self, config: ProviderConfig, client: Optional[httpx.AsyncClient] = None):
        self.account_sid = config.account_sid
        self.auth_token = config.auth_token
        self.base_url = f"{config.api_base_url.rstrip('/')}/Accounts/{self.account_sid}"
        self._client = client

    async def send_message(self, from_: str, to: str, body: str) -> SentMessage:
        """
        Sends a WhatsApp message via Twilio.

        A single attempt with the transport's default timeout. Addresses
        must already carry the "whatsapp:" marker.
        """
        url = f"{self.base_url}/Messages.json"
        data = {
            "From": from_,
            "To": to,
            "Body": body
        }

        logger.info(f"📤 Sending Twilio message to {mask_phone(strip_whatsapp_prefix(to))}")

        try:
            if self._client is not None:
                response = await self._post(self._client, url, data)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, url, data)
        except httpx.HTTPError as e:
            logger.error(f"Twilio transport error: {e}")
            raise ProviderError(str(e) or type(e).__name__) from e

        if response.status_code in (200, 201):
            # Accepted: a body that is not JSON still counts as sent
            result = self._parse_json(response) or {}
            logger.info(f"✅ Message sent: SID={result.get('sid')}")
            return SentMessage(sid=result.get("sid"), status=result.get("status"))

        message, code = self._parse_error(response)
        logger.error(f"❌ Twilio API error: {response.status_code} - {message}")
        raise ProviderError(message, details={"status": response.status_code, "code": code})

    async def _post(self, client: httpx.AsyncClient, url: str, data: dict) -> httpx.Response:
        return await client.post(
            url,
            data=data,
            auth=(self.account_sid, self.auth_token),
        )

    @staticmethod
    def _parse_error(response: httpx.Response):
        """
        Extracts Twilio's error message and code.

        Twilio error bodies look like
        {"code": 21211, "message": "The 'To' number ... is not valid.", "status": 400}
        """
        payload = TwilioService._parse_json(response)
        if payload and payload.get("message"):
            return str(payload["message"]), payload.get("code")

        return f"Twilio API error: {response.status_code}", None

    @staticmethod
    def _parse_json(response: httpx.Response) -> Optional[dict]:
        """Returns the JSON object body, or None when the body is not one."""
        try:
            payload = response.json()
        except ValueError:
            return None
        return payload if isinstance(payload, dict) else None
