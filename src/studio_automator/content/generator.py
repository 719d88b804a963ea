"""Content generator: turns request text into finished copy.

Knows the prompts and how to clean model output. Knows nothing about
intents, channels or providers beyond the `generate()` capability.
"""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum

from ..constants import POST_DATE_FORMAT, GenerationCapability
from ..errors import GenerationError
from ..utils import strip_code_fence
from .prompts import build_blog_prompt, build_chat_prompt, build_message_prompt

_logger = logging.getLogger("ai_calls")

_QUOTE_PAIRS = (('"', '"'), ("'", "'"), ("“", "”"))


def _provider_label(text_provider: GenerationCapability) -> str:
    current = getattr(text_provider, "current_provider", None)
    if isinstance(current, Enum):
        return str(current.value)
    return str(current) if current else "unknown"


def clean_message(text: str) -> str:
    """Strip code fences and one pair of surrounding quotes from a message."""
    cleaned = strip_code_fence(text)
    for opening, closing in _QUOTE_PAIRS:
        if len(cleaned) >= 2 and cleaned.startswith(opening) and cleaned.endswith(closing):
            cleaned = cleaned[1:-1].strip()
            break
    return cleaned


class ContentGenerator:
    """Generates promotional messages, blog posts and chat replies.

    Every method returns validated, non-empty text or raises
    GenerationError, so callers never hand an empty payload to a channel.

    Usage:
        generator = ContentGenerator(selector)
        message = await generator.generate_message("Saturday sunrise yoga")
    """

    def __init__(self, text_provider: GenerationCapability):
        self.text_provider = text_provider

    async def _generate(self, prompt: str, task: str) -> str:
        _logger.debug(f"GENERATE | task:{task}")
        text = await self.text_provider.generate(prompt)
        if not isinstance(text, str) or not text.strip():
            raise GenerationError(_provider_label(self.text_provider), f"empty {task} content")
        return text

    async def generate_message(self, description: str) -> str:
        """Generate a short casual promotional message with a call-to-action."""
        text = await self._generate(build_message_prompt(description), "message")
        message = clean_message(text)
        if not message:
            raise GenerationError(_provider_label(self.text_provider), "empty message content")
        return message

    async def generate_blog_post(self, description: str, today: date | None = None) -> str:
        """Generate a markdown blog post with YAML front-matter."""
        day = (today or date.today()).strftime(POST_DATE_FORMAT)
        text = await self._generate(build_blog_prompt(description, day), "blog")
        post = strip_code_fence(text)
        if not post:
            raise GenerationError(_provider_label(self.text_provider), "empty blog content")
        return post + "\n"

    async def generate_chat_reply(self, message: str) -> str:
        """Generate a conversational reply that suggests the available commands."""
        text = await self._generate(build_chat_prompt(message), "chat")
        return text.strip()
