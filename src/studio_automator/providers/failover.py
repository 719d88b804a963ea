"""Provider selection and failover.

Owns the set of generation backends, the current-provider pointer and the
single-hop failover that runs when a call fails.

Usage:
    selector = ProviderSelector.from_config(load_provider_config())
    text = await selector.generate("Write a caption")
    # openai fails -> switch to perplexity -> retry once -> text or error
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from ..constants import GenerationCapability, ProviderId
from ..errors import (
    GenerationError,
    InvalidProvider,
    NoProviderConfigured,
    ProviderUnavailable,
)
from .config import ProviderConfig, is_valid_credential
from .text import create_backends

_logger = logging.getLogger("ai_calls")


def parse_provider_id(value: ProviderId | str) -> ProviderId:
    """Convert a user-supplied identifier into a ProviderId.

    Raises:
        InvalidProvider: If the value is not a supported identifier.
    """
    if isinstance(value, ProviderId):
        return value
    try:
        return ProviderId(str(value).strip().lower())
    except ValueError:
        raise InvalidProvider(str(value), ProviderId.values()) from None


def _normalize_credentials(
    credentials: Mapping[ProviderId | str, str | None],
) -> dict[ProviderId, str | None]:
    normalized: dict[ProviderId, str | None] = {provider: None for provider in ProviderId}
    for key, secret in credentials.items():
        try:
            provider = parse_provider_id(key)
        except InvalidProvider:
            _logger.debug(f"Ignoring credential for unknown provider {key!r}")
            continue
        normalized[provider] = secret
    return normalized


def select_initial_provider(
    credentials: Mapping[ProviderId | str, str | None],
    primary: ProviderId = ProviderId.OPENAI,
) -> ProviderId:
    """Pick the provider to start with.

    Prefers `primary` when its credential is valid, else the first provider
    (in declaration order) that has one.

    Raises:
        NoProviderConfigured: If no provider has a valid credential.
    """
    creds = _normalize_credentials(credentials)

    if is_valid_credential(creds.get(primary)):
        return primary

    for provider in ProviderId:
        if is_valid_credential(creds.get(provider)):
            _logger.info(f"Primary provider {primary.value} not available, using {provider.value}")
            return provider

    raise NoProviderConfigured()


def select_fallback_provider(
    credentials: Mapping[ProviderId | str, str | None],
    current: ProviderId,
    preferred: ProviderId | None = None,
) -> ProviderId | None:
    """Pick the failover partner for `current`.

    Returns `preferred` when it is valid and distinct from `current`, else
    any other valid provider, else None (single-provider setups have no
    fallback).
    """
    creds = _normalize_credentials(credentials)

    if preferred is not None and preferred != current and is_valid_credential(creds.get(preferred)):
        return preferred

    for provider in ProviderId:
        if provider != current and is_valid_credential(creds.get(provider)):
            return provider

    return None


class ProviderStatus(BaseModel):
    """Snapshot of provider availability and the active provider."""

    current_provider: ProviderId
    providers: dict[ProviderId, bool]


class ProviderState:
    """Holder for the active-provider pointer.

    One instance is shared by every request an orchestrator serves. Reads
    and swaps are single attribute operations; concurrent failovers may
    switch redundantly, which is harmless.
    """

    def __init__(self, current: ProviderId, availability: Mapping[ProviderId, bool]):
        self._availability = {provider: bool(availability.get(provider, False)) for provider in ProviderId}
        self._current = current

    @property
    def current(self) -> ProviderId:
        """Currently active provider."""
        return self._current

    def swap(self, provider: ProviderId) -> ProviderId:
        """Set the active provider and return the previous one."""
        previous = self._current
        self._current = provider
        return previous

    def is_available(self, provider: ProviderId) -> bool:
        """Whether the provider has a usable credential."""
        return self._availability.get(provider, False)

    @property
    def availability(self) -> dict[ProviderId, bool]:
        """Copy of the availability map."""
        return dict(self._availability)

    def available_providers(self) -> list[ProviderId]:
        """Providers with a usable credential, in declaration order."""
        return [provider for provider in ProviderId if self._availability[provider]]


class ProviderSelector:
    """Generation capability with a primary/fallback provider pair.

    Features:
    - Initial provider chosen from credential presence
    - One failover hop per call: never more than two backend calls
    - Explicit provider switching, visible to subsequent calls
    - Usage statistics per provider

    Example:
        selector = ProviderSelector(
            backends={ProviderId.OPENAI: openai_backend, ProviderId.PERPLEXITY: pplx_backend},
            credentials={"openai": "sk-...", "perplexity": "pplx-..."},
            primary=ProviderId.OPENAI,
            fallback=ProviderId.PERPLEXITY,
        )
        text = await selector.generate("Write a caption")
    """

    def __init__(
        self,
        backends: Mapping[ProviderId, GenerationCapability],
        credentials: Mapping[ProviderId | str, str | None],
        primary: ProviderId = ProviderId.OPENAI,
        fallback: ProviderId | None = None,
        state: ProviderState | None = None,
        fallback_on_error: bool = True,
    ):
        """Initialize the selector.

        Args:
            backends: Generation backend per provider.
            credentials: Secret (or None) per provider; presence means available.
            primary: Provider preferred at startup.
            fallback: Preferred failover partner.
            state: Shared pointer holder (created if not provided).
            fallback_on_error: If False, failures propagate without failover.

        Raises:
            NoProviderConfigured: If no provider has both a backend and a credential.
        """
        self.backends = dict(backends)
        self.fallback_on_error = fallback_on_error

        # A provider without a backend cannot be used even with a key
        creds = _normalize_credentials(credentials)
        usable = {
            provider: (secret if provider in self.backends else None)
            for provider, secret in creds.items()
        }
        availability = {provider: is_valid_credential(secret) for provider, secret in usable.items()}

        self.primary = select_initial_provider(usable, primary)
        if state is None:
            state = ProviderState(self.primary, availability)
        self.state = state

        self.fallback = select_fallback_provider(usable, self.primary, fallback)

        self._stats: dict[str, Any] = {
            "total_calls": 0,
            "successful_calls": 0,
            "failed_calls": 0,
            "failovers": 0,
            "provider_usage": {},
        }

        _logger.info(
            f"PROVIDERS | current:{self.primary.value} | "
            f"fallback:{self.fallback.value if self.fallback else 'none'} | "
            f"available:{[p.value for p in self.state.available_providers()]}"
        )

    @classmethod
    def from_config(
        cls,
        config: ProviderConfig,
        state: ProviderState | None = None,
    ) -> "ProviderSelector":
        """Build a selector with Agno backends from configuration."""
        settings = config.provider_settings
        return cls(
            backends=create_backends(config),
            credentials=config.credentials(),
            primary=settings.primary,
            fallback=settings.fallback,
            state=state,
            fallback_on_error=settings.fallback_on_error,
        )

    @property
    def current_provider(self) -> ProviderId:
        """Get the active provider."""
        return self.state.current

    def _failover_target(self, provider: ProviderId) -> ProviderId | None:
        """Get the fallback for a failure on `provider`, if any.

        Only a failing non-fallback provider hops, and only to an available
        fallback. A failure on the fallback itself propagates.
        """
        if self.fallback is None or provider == self.fallback:
            return None
        if not self.state.is_available(self.fallback):
            return None
        return self.fallback

    def _log_provider_switch(self, from_provider: ProviderId, to_provider: ProviderId, reason: str) -> None:
        """Log switching to a different provider."""
        _logger.warning(f"Switching from {from_provider.value} to {to_provider.value}: {reason}")

    async def _call(self, provider: ProviderId, prompt: str) -> str:
        """Run one backend call, normalizing every failure to GenerationError."""
        backend = self.backends.get(provider)
        if backend is None:
            raise GenerationError(provider.value, "no backend configured")

        try:
            result = await backend.generate(prompt)
        except GenerationError as e:
            if e.provider != provider.value:
                raise GenerationError(provider.value, e.cause) from e
            raise
        except Exception as e:
            raise GenerationError(provider.value, e) from e

        if not isinstance(result, str) or not result.strip():
            raise GenerationError(provider.value, "empty response")

        self._stats["provider_usage"][provider.value] = (
            self._stats["provider_usage"].get(provider.value, 0) + 1
        )
        return result

    async def generate(self, prompt: str) -> str:
        """Generate text with at most one failover hop.

        Args:
            prompt: The prompt to send.

        Returns:
            Generated text from the current provider or its fallback.

        Raises:
            GenerationError: Labelled with the last provider tried.
        """
        self._stats["total_calls"] += 1
        provider = self.state.current

        if not self.state.is_available(provider):
            partner = self._failover_target(provider)
            if partner is None:
                self._stats["failed_calls"] += 1
                raise GenerationError(provider.value, "provider not available")
            self._log_provider_switch(provider, partner, "provider not available")
            self.state.swap(partner)
            self._stats["failovers"] += 1
            provider = partner

        try:
            result = await self._call(provider, prompt)
        except GenerationError as first_error:
            _logger.warning(f"Provider {provider.value} failed: {first_error.cause}")

            partner = self._failover_target(provider) if self.fallback_on_error else None
            if partner is None:
                self._stats["failed_calls"] += 1
                raise

            self._log_provider_switch(provider, partner, str(first_error.cause))
            self.state.swap(partner)
            self._stats["failovers"] += 1

            try:
                result = await self._call(partner, prompt)
            except GenerationError:
                self._stats["failed_calls"] += 1
                _logger.error(f"All providers exhausted, last tried {partner.value}")
                raise

        self._stats["successful_calls"] += 1
        return result

    def switch_provider(self, provider: ProviderId | str) -> None:
        """Make `provider` the active provider.

        Raises:
            InvalidProvider: If the identifier is not supported.
            ProviderUnavailable: If the provider has no valid credential.
        """
        target = parse_provider_id(provider)
        if not self.state.is_available(target):
            raise ProviderUnavailable(target.value)

        previous = self.state.swap(target)
        _logger.info(f"Switched provider: {previous.value} -> {target.value}")

    def status(self) -> ProviderStatus:
        """Get availability of every provider and the active one."""
        return ProviderStatus(
            current_provider=self.state.current,
            providers=self.state.availability,
        )

    def get_stats(self) -> dict[str, Any]:
        """Get usage statistics."""
        stats = self._stats.copy()
        stats["provider_usage"] = dict(self._stats["provider_usage"])
        return stats
