"""Shared test fixtures and configuration.

Provides fake generation backends, mock collaborators and temporary
content directories for testing the Studio Automator components.
All async collaborators are AsyncMock-compatible.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from studio_automator.constants import ProviderId
from studio_automator.delivery import DeliveryReceipt, MarkdownPostStore, SimulatedWhatsAppSender
from studio_automator.providers import ProviderSelector, WhatsAppSettings


class FakeBackend:
    """Scripted generation backend.

    Each call pops the next scripted item: strings are returned, exceptions
    are raised. When the script runs out, the last item repeats.
    """

    def __init__(self, *script: Any):
        self.script = list(script) or ["ok"]
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, BaseException):
            raise item
        return item


SAMPLE_BLOG = """---
title: "Sunrise Yoga Workshop"
date: "2024-06-01"
tags: ["yoga", "workshop", "wellness"]
description: "Start your weekend with a sunrise flow"
---

# Sunrise Yoga Workshop

Join us this Saturday at 7am for a gentle flow.
"""


@pytest.fixture
def fake_backend() -> type[FakeBackend]:
    """The FakeBackend class, for tests that build their own backends."""
    return FakeBackend


@pytest.fixture
def both_credentials() -> dict[ProviderId, str]:
    """Credentials with both providers configured."""
    return {ProviderId.OPENAI: "sk-test-openai", ProviderId.PERPLEXITY: "pplx-test"}


@pytest.fixture
def make_selector(both_credentials):
    """Factory for selectors over fake backends.

    Usage:
        selector, openai, pplx = make_selector(openai=["hi"], perplexity=[RuntimeError()])
    """
    def _make(
        openai: list[Any] | None = None,
        perplexity: list[Any] | None = None,
        credentials: dict | None = None,
        **kwargs: Any,
    ) -> tuple[ProviderSelector, FakeBackend, FakeBackend]:
        openai_backend = FakeBackend(*(openai or ["openai text"]))
        pplx_backend = FakeBackend(*(perplexity or ["perplexity text"]))
        selector = ProviderSelector(
            backends={ProviderId.OPENAI: openai_backend, ProviderId.PERPLEXITY: pplx_backend},
            credentials=both_credentials if credentials is None else credentials,
            **kwargs,
        )
        return selector, openai_backend, pplx_backend

    return _make


@pytest.fixture
def mock_text_provider() -> AsyncMock:
    """Create a mock generation capability.

    Returns:
        AsyncMock configured as a text provider.
    """
    provider = AsyncMock()
    provider.generate.return_value = "Mock generated text response"
    provider.current_provider = ProviderId.OPENAI
    return provider


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Temporary directory for stored posts (not created up front)."""
    return tmp_path / "content" / "events"


@pytest.fixture
def post_store(content_dir: Path) -> MarkdownPostStore:
    return MarkdownPostStore(content_dir)


@pytest.fixture
def simulated_sender() -> SimulatedWhatsAppSender:
    """Simulated WhatsApp sender without delay."""
    return SimulatedWhatsAppSender(delay_seconds=0)


@pytest.fixture
def mock_sender() -> AsyncMock:
    sender = AsyncMock()
    sender.send.return_value = DeliveryReceipt(message_id="SM123", status="queued", to="+15551234567")
    return sender


@pytest.fixture
def whatsapp_settings() -> WhatsAppSettings:
    """Configured Twilio settings, isolated from the real environment."""
    return WhatsAppSettings(
        _env_file=None,
        twilio_account_sid="ACtest123",
        twilio_auth_token="secret-token",
        whatsapp_to_number="+15551234567",
        twilio_whatsapp_number="+14155238886",
    )
