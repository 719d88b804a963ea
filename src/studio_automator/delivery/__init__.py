"""Delivery adapters - WhatsApp messages and markdown blog posts."""

from .models import BulkSendResult, DeliveryReceipt, MessageStatus, StoredPost
from .whatsapp import (
    SimulatedWhatsAppSender,
    TwilioWhatsAppSender,
    create_message_sender,
    validate_phone_number,
)
from .markdown import MarkdownPostStore, derive_filename, parse_frontmatter

__all__ = [
    "BulkSendResult",
    "DeliveryReceipt",
    "MessageStatus",
    "StoredPost",
    "SimulatedWhatsAppSender",
    "TwilioWhatsAppSender",
    "create_message_sender",
    "validate_phone_number",
    "MarkdownPostStore",
    "derive_filename",
    "parse_frontmatter",
]
