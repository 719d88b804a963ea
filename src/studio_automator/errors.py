"""Exception hierarchy for Studio Automator.

Provider errors are raised by the provider selector, delivery and persistence
errors by the adapters. The orchestrator converts everything below
GenerationError into failed task outcomes; nothing escapes `handle()`.
"""

from __future__ import annotations


class StudioAutomatorError(Exception):
    """Base exception for all Studio Automator errors."""

    pass


# =============================================================================
# Provider errors
# =============================================================================


class NoProviderConfigured(StudioAutomatorError):
    """No generation backend has a usable credential."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "No AI providers available. Please configure OpenAI or Perplexity API keys."
        )


class ProviderUnavailable(StudioAutomatorError):
    """Requested provider has no valid credential."""

    def __init__(self, provider: str):
        super().__init__(f"Provider {provider} is not available")
        self.provider = provider


class InvalidProvider(StudioAutomatorError, ValueError):
    """Provider identifier is not one of the supported providers."""

    def __init__(self, provider: str, supported: list[str] | None = None):
        supported = supported or []
        choices = " or ".join(f'"{name}"' for name in supported)
        message = f"Invalid provider: {provider!r}"
        if choices:
            message += f". Must be {choices}"
        super().__init__(message)
        self.provider = provider
        self.supported = supported


class GenerationError(StudioAutomatorError):
    """A provider failed to produce text."""

    def __init__(self, provider: str, cause: BaseException | str):
        super().__init__(f"Generation failed with {provider}: {cause}")
        self.provider = provider
        self.cause = cause


# =============================================================================
# Delivery errors
# =============================================================================


class DeliveryError(StudioAutomatorError):
    """Message could not be delivered."""

    def __init__(self, cause: BaseException | str):
        super().__init__(f"Failed to deliver message: {cause}")
        self.cause = cause


class PersistenceError(StudioAutomatorError):
    """Document could not be written, read or removed."""

    def __init__(self, cause: BaseException | str):
        super().__init__(f"Failed to persist document: {cause}")
        self.cause = cause
