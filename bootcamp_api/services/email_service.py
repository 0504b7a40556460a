"""
Transactional email senders.

``console`` logs messages (development), ``mailtrap`` posts them to the
Mailtrap send API. Both raise ``EmailDeliveryError`` when a message cannot
be handed over.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

import httpx
import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from bootcamp_api.config import settings

logger = structlog.get_logger(__name__)


class EmailDeliveryError(Exception):
    """The email could not be delivered to the provider."""


class EmailSender(ABC):
    """Base class for all email backends"""

    @abstractmethod
    async def send(self, recipient: str, subject: str, body: str) -> None:
        """Send a plain-text email or raise EmailDeliveryError."""


class ConsoleEmailSender(EmailSender):
    """Writes emails to the log instead of sending them."""

    async def send(self, recipient: str, subject: str, body: str) -> None:
        logger.info("email_console_delivery", recipient=recipient, subject=subject, body=body)


class MailtrapEmailSender(EmailSender):
    """Mailtrap send API implementation"""

    def __init__(
        self,
        api_token: str,
        api_url: str = settings.MAILTRAP_API_URL,
        sender_email: str = settings.EMAIL_FROM,
        sender_name: str = settings.EMAIL_FROM_NAME,
        timeout: float = settings.EMAIL_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_token = api_token
        self.api_url = api_url
        self.sender_email = sender_email
        self.sender_name = sender_name
        self.timeout = timeout
        self.transport = transport

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def _post(self, payload: Dict) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            return await client.post(
                self.api_url,
                headers={"Authorization": f"Bearer {self.api_token}"},
                json=payload,
            )

    async def send(self, recipient: str, subject: str, body: str) -> None:
        payload = {
            "from": {"email": self.sender_email, "name": self.sender_name},
            "to": [{"email": recipient}],
            "subject": subject,
            "text": body,
            "category": "Password Reset",
        }

        try:
            response = await self._post(payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("email_delivery_failed", recipient=recipient, error=str(e))
            raise EmailDeliveryError(str(e)) from e

        logger.info("email_sent", recipient=recipient, subject=subject)


_backends: Dict[str, Type[EmailSender]] = {
    "console": ConsoleEmailSender,
    "mailtrap": MailtrapEmailSender,
}

_instance: Optional[EmailSender] = None


def build_email_sender(backend: Optional[str] = None) -> EmailSender:
    """Create the configured email backend."""
    backend = (backend or settings.EMAIL_BACKEND).lower()

    if backend not in _backends:
        available = ", ".join(_backends.keys())
        raise ValueError(f"Unknown email backend: {backend}. Available backends: {available}")

    if backend == "mailtrap":
        if not settings.MAILTRAP_API_TOKEN:
            raise ValueError("MAILTRAP_API_TOKEN is required for the mailtrap email backend")
        return MailtrapEmailSender(api_token=settings.MAILTRAP_API_TOKEN)

    return _backends[backend]()


def get_email_sender() -> EmailSender:
    """Dependency returning the process-wide email sender."""
    global _instance
    if _instance is None:
        _instance = build_email_sender()
    return _instance
