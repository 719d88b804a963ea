"""WhatsApp message delivery through the Twilio REST API.

Two senders implement the same contract (`send`, `send_bulk` and
`get_message_status`):
- TwilioWhatsAppSender: posts to Twilio's Messages endpoint with httpx
- SimulatedWhatsAppSender: logs the message and reports it as delivered

`create_message_sender()` picks one at construction time from credential
presence, so the simulated mode never hides a failure of the live one.
"""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import datetime
from typing import Any, Awaitable, Sequence

import httpx

from ..constants import (
    DELIVERY_TIMEOUT_SECONDS,
    MESSAGE_LOG_PREVIEW_LENGTH,
    SIMULATED_SEND_DELAY_SECONDS,
    MessageDeliveryCapability,
)
from ..errors import DeliveryError
from ..providers.config import WhatsAppSettings
from ..utils import random_token
from .models import BulkSendResult, DeliveryReceipt, MessageStatus

_logger = logging.getLogger("delivery")

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"

_E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")


def validate_phone_number(phone_number: str) -> bool:
    """Check that a phone number is in E.164 format (e.g., +14155238886)."""
    return bool(_E164_PATTERN.match(phone_number or ""))


def _preview(body: str) -> str:
    if len(body) > MESSAGE_LOG_PREVIEW_LENGTH:
        return body[:MESSAGE_LOG_PREVIEW_LENGTH] + "..."
    return body


class TwilioWhatsAppSender:
    """Sends WhatsApp messages through Twilio.

    Usage:
        sender = TwilioWhatsAppSender(WhatsAppSettings())
        receipt = await sender.send("Sunrise flow this Saturday at 7am!")
        status = await sender.get_message_status(receipt.message_id)
    """

    def __init__(
        self,
        settings: WhatsAppSettings,
        client: httpx.AsyncClient | None = None,
        timeout: float = DELIVERY_TIMEOUT_SECONDS,
    ):
        """Initialize the sender.

        Args:
            settings: Twilio credentials and phone numbers.
            client: Optional shared HTTP client (one is created per request otherwise).
            timeout: HTTP timeout in seconds.
        """
        self.settings = settings
        self._client = client
        self.timeout = timeout

    @property
    def account_url(self) -> str:
        return f"{TWILIO_API_BASE}/Accounts/{self.settings.twilio_account_sid}"

    @property
    def messages_url(self) -> str:
        """Twilio Messages endpoint for the configured account."""
        return f"{self.account_url}/Messages.json"

    @property
    def _auth(self) -> tuple[str, str]:
        return (self.settings.twilio_account_sid or "", self.settings.twilio_auth_token or "")

    async def _post(self, data: dict[str, str]) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.messages_url, data=data, auth=self._auth)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.messages_url, data=data, auth=self._auth)

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, auth=self._auth)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url, auth=self._auth)

    async def _request_json(self, request: Awaitable[httpx.Response]) -> dict[str, Any]:
        """Await a Twilio request and decode its JSON body.

        Raises:
            DeliveryError: On HTTP errors, network errors or a non-JSON body.
        """
        try:
            response = await request
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            _logger.error(f"WHATSAPP_ERROR | status:{e.response.status_code} | body:{e.response.text[:200]}")
            raise DeliveryError(
                f"Twilio returned HTTP {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            _logger.error(f"WHATSAPP_ERROR | error:{e}")
            raise DeliveryError(e) from e

    async def _send_to(self, body: str, to_number: str) -> DeliveryReceipt:
        data = {
            "From": f"whatsapp:{self.settings.twilio_whatsapp_number}",
            "To": f"whatsapp:{to_number}",
            "Body": body,
        }
        payload = await self._request_json(self._post(data))

        receipt = DeliveryReceipt(
            message_id=str(payload.get("sid", "")),
            status=str(payload.get("status", "queued")),
            to=to_number,
        )
        _logger.info(
            f"WHATSAPP_SENT | id:{receipt.message_id} | to:{to_number} | "
            f"status:{receipt.status} | body:{_preview(body)}"
        )
        return receipt

    async def send(self, body: str) -> DeliveryReceipt:
        """Send a message to the configured recipient.

        Raises:
            DeliveryError: If the recipient is missing or Twilio rejects the request.
        """
        to_number = self.settings.whatsapp_to_number
        if not to_number:
            raise DeliveryError("WhatsApp phone number not configured")
        return await self._send_to(body, to_number)

    async def send_bulk(self, messages: Sequence[str], phone_numbers: Sequence[str]) -> list[BulkSendResult]:
        """Send messages[i] to phone_numbers[i], one request at a time.

        A failed recipient is recorded and does not stop the others.

        Raises:
            ValueError: If the two sequences differ in length.
        """
        _check_bulk_args(messages, phone_numbers)

        results = []
        for body, phone_number in zip(messages, phone_numbers):
            try:
                receipt = await self._send_to(body, phone_number)
            except DeliveryError as e:
                results.append(BulkSendResult(phone_number=phone_number, success=False, error=str(e)))
                continue
            results.append(
                BulkSendResult(
                    phone_number=phone_number,
                    success=True,
                    message_id=receipt.message_id,
                    status=receipt.status,
                )
            )

        sent = sum(1 for result in results if result.success)
        _logger.info(f"WHATSAPP_BULK | sent:{sent} | failed:{len(results) - sent}")
        return results

    async def get_message_status(self, message_id: str) -> MessageStatus:
        """Fetch the current state of a sent message.

        Raises:
            DeliveryError: If Twilio cannot be reached or does not know the message.
        """
        payload = await self._request_json(self._get(f"{self.account_url}/Messages/{message_id}.json"))
        return MessageStatus(
            message_id=str(payload.get("sid", message_id)),
            status=str(payload.get("status", "unknown")),
            direction=payload.get("direction"),
            from_number=payload.get("from"),
            to=payload.get("to"),
            body=payload.get("body"),
            date_created=payload.get("date_created"),
            date_updated=payload.get("date_updated"),
        )


class SimulatedWhatsAppSender:
    """Pretends to send messages, for environments without Twilio credentials.

    Every message is logged and kept in `sent` for inspection.
    """

    def __init__(
        self,
        delay_seconds: float = SIMULATED_SEND_DELAY_SECONDS,
        to_number: str | None = None,
    ):
        self.delay_seconds = delay_seconds
        self.to_number = to_number
        self.sent: list[str] = []
        self._bodies: dict[str, str] = {}

    async def _record(self, body: str) -> str:
        message_id = random_token(7)
        _logger.info(f"WHATSAPP_SIMULATED | id:{message_id} | body:{_preview(body)}")

        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        self.sent.append(body)
        self._bodies[message_id] = body
        return message_id

    async def send(self, body: str) -> DeliveryReceipt:
        """Log the message and return a delivered receipt."""
        message_id = await self._record(body)
        return DeliveryReceipt(
            message_id=message_id,
            status="delivered",
            to=self.to_number,
            simulated=True,
        )

    async def send_bulk(self, messages: Sequence[str], phone_numbers: Sequence[str]) -> list[BulkSendResult]:
        """Log every message and report each recipient as delivered."""
        _check_bulk_args(messages, phone_numbers)

        results = []
        for body, phone_number in zip(messages, phone_numbers):
            message_id = await self._record(body)
            results.append(
                BulkSendResult(
                    phone_number=phone_number,
                    success=True,
                    message_id=message_id,
                    status="delivered",
                    simulated=True,
                )
            )
        return results

    async def get_message_status(self, message_id: str) -> MessageStatus:
        now = datetime.now().isoformat()
        return MessageStatus(
            message_id=message_id,
            status="delivered",
            direction="outbound-api",
            to=f"whatsapp:{self.to_number}" if self.to_number else None,
            body=self._bodies.get(message_id, "Simulated message content"),
            date_created=now,
            date_updated=now,
            simulated=True,
        )


def _check_bulk_args(messages: Sequence[str], phone_numbers: Sequence[str]) -> None:
    if len(messages) != len(phone_numbers):
        raise ValueError(
            f"Got {len(messages)} messages for {len(phone_numbers)} phone numbers"
        )


def create_message_sender(
    settings: WhatsAppSettings,
    simulated_delay_seconds: float | None = None,
) -> MessageDeliveryCapability:
    """Create the live sender when Twilio is configured, else the simulated one."""
    if settings.is_configured:
        _logger.info("WhatsApp service configured, messages will be sent via Twilio")
        return TwilioWhatsAppSender(settings)

    _logger.warning("WhatsApp credentials not configured - messages will be simulated")
    delay = SIMULATED_SEND_DELAY_SECONDS if simulated_delay_seconds is None else simulated_delay_seconds
    return SimulatedWhatsAppSender(delay_seconds=delay, to_number=settings.whatsapp_to_number)
