"""AI Providers - Agno text backends, configuration and failover."""

from .config import (
    ProviderConfig,
    ProviderSettings,
    TextProviderConfig,
    WhatsAppSettings,
    ContentConfig,
    is_valid_credential,
    load_provider_config,
)
from .text import AgnoTextBackend, DEFAULT_SYSTEM_PROMPT, create_backends
from .failover import (
    ProviderSelector,
    ProviderState,
    ProviderStatus,
    parse_provider_id,
    select_initial_provider,
    select_fallback_provider,
)

__all__ = [
    "ProviderConfig",
    "ProviderSettings",
    "TextProviderConfig",
    "WhatsAppSettings",
    "ContentConfig",
    "is_valid_credential",
    "load_provider_config",
    "AgnoTextBackend",
    "DEFAULT_SYSTEM_PROMPT",
    "create_backends",
    "ProviderSelector",
    "ProviderState",
    "ProviderStatus",
    "parse_provider_id",
    "select_initial_provider",
    "select_fallback_provider",
]
