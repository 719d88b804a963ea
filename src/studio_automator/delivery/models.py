"""Data models for delivery and persistence adapters."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class DeliveryReceipt(BaseModel):
    """Result of sending one message."""

    message_id: str
    status: str
    to: str | None = None
    simulated: bool = False
    sent_at: datetime = Field(default_factory=datetime.now)


class StoredPost(BaseModel):
    """A blog post read back from the content store."""

    filename: str
    title: str | None = None
    date: str | None = None
    tags: list[str] = Field(default_factory=list)
    description: str | None = None
    frontmatter: dict[str, Any] = Field(default_factory=dict)
    body: str = ""


class BulkSendResult(BaseModel):
    """Outcome of one recipient in a bulk send."""

    phone_number: str
    success: bool
    message_id: str | None = None
    status: str | None = None
    error: str | None = None
    simulated: bool = False


class MessageStatus(BaseModel):
    """Delivery state of a previously sent message, as reported by Twilio."""

    message_id: str
    status: str
    direction: str | None = None
    from_number: str | None = None
    to: str | None = None
    body: str | None = None
    date_created: str | None = None
    date_updated: str | None = None
    simulated: bool = False
