"""
Notification Dispatcher
Best-effort email and SMS alerts for new blood requests.

Channels are independent: each one is only built when its credentials are
configured, runs concurrently with the others, and has its failures logged and
dropped. Nothing here ever raises into the request path.
"""
import asyncio
import logging
from typing import List, Optional, Set

import httpx
from twilio.rest import Client as TwilioClient

from config import Settings
from models import BloodRequest, NotificationChannelType, NotificationMessage
from .errors import NotificationError

logger = logging.getLogger(__name__)

EMAIL_TIMEOUT_SECONDS = 10.0


def build_message(request: BloodRequest) -> NotificationMessage:
    group = request.blood_group.value
    units = request.units_required
    return NotificationMessage(
        subject="New Blood Request",
        email_body=f"{request.patient_name} requested {units} unit(s) of {group} in {request.city}.",
        sms_body=f"New {group} request for {request.patient_name}: {units} unit(s) in {request.city}.",
    )


class EmailChannel:
    """Transactional email over an HTTP API (Brevo v3 compatible payload)."""
    name = NotificationChannelType.EMAIL.value

    def __init__(self, api_key: str, sender: str, recipient: str, api_url: str,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self.sender = sender
        self.recipient = recipient
        self.api_url = api_url
        self._transport = transport

    async def send(self, message: NotificationMessage) -> None:
        payload = {
            "sender": {"email": self.sender},
            "to": [{"email": self.recipient}],
            "subject": message.subject,
            "textContent": message.email_body,
        }
        headers = {
            "accept": "application/json",
            "api-key": self.api_key,
            "content-type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=EMAIL_TIMEOUT_SECONDS, transport=self._transport) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise NotificationError(self.name, str(e)) from e


class SmsChannel:
    name = NotificationChannelType.SMS.value

    def __init__(self, client: TwilioClient, from_number: str, to_number: str):
        self.client = client
        self.from_number = from_number
        self.to_number = to_number

    async def send(self, message: NotificationMessage) -> None:
        # The Twilio client is blocking; keep it off the event loop.
        try:
            await asyncio.to_thread(
                self.client.messages.create,
                body=message.sms_body,
                from_=self.from_number,
                to=self.to_number,
            )
        except Exception as e:
            raise NotificationError(self.name, str(e)) from e


def build_channels(settings: Settings) -> list:
    channels = []
    if settings.email_enabled:
        channels.append(EmailChannel(
            api_key=settings.email_api_key,
            sender=settings.email_sender,
            recipient=settings.admin_email,
            api_url=settings.email_api_url,
        ))
    else:
        logger.debug("Email channel disabled: credentials not configured")

    if settings.sms_enabled:
        channels.append(SmsChannel(
            TwilioClient(settings.twilio_sid, settings.twilio_auth),
            from_number=settings.twilio_phone,
            to_number=settings.admin_phone,
        ))
    else:
        logger.debug("SMS channel disabled: credentials not configured")
    return channels


class NotificationDispatcher:
    def __init__(self, channels: List):
        self.channels = list(channels)
        self._pending: Set[asyncio.Task] = set()

    async def notify(self, request: BloodRequest) -> None:
        """Send through every channel concurrently; failures are logged, never raised."""
        if not self.channels:
            return
        message = build_message(request)
        results = await asyncio.gather(
            *(channel.send(message) for channel in self.channels),
            return_exceptions=True,
        )
        for channel, result in zip(self.channels, results):
            if isinstance(result, BaseException):
                logger.warning("Notification via %s failed for request %s: %s", channel.name, request.id, result)
            else:
                logger.info("Notification via %s sent for request %s", channel.name, request.id)

    def dispatch(self, request: BloodRequest) -> Optional[asyncio.Task]:
        """Schedule notify() and return without waiting for it."""
        if not self.channels:
            return None
        task = asyncio.create_task(self.notify(request))
        # The loop only keeps weak references to tasks.
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
