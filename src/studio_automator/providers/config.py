"""Provider configuration loading and validation."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import (
    GENERATION_MAX_TOKENS,
    GENERATION_TEMPERATURE,
    ProviderId,
    get_config_path,
    get_content_dir,
)

# Load .env file
load_dotenv()


def is_valid_credential(secret: str | None, placeholder: str | None = None) -> bool:
    """Check that a secret is present and not a template placeholder.

    Values like ``your_openai_api_key_here`` ship in example env files and
    must not count as configured.
    """
    if not secret or not secret.strip():
        return False
    value = secret.strip()
    if placeholder and value == placeholder:
        return False
    return not (value.startswith("your_") and value.endswith("_here"))


class ProviderSettings(BaseModel):
    """Global provider settings."""

    primary: ProviderId = ProviderId.OPENAI
    fallback: ProviderId | None = ProviderId.PERPLEXITY
    fallback_on_error: bool = True


class TextProviderConfig(BaseModel):
    """Configuration for a text provider."""

    enabled: bool = True
    model: str
    api_key: str | None = None
    api_key_env: str | None = None
    placeholder: str | None = None
    base_url: str | None = None
    timeout: int = 60
    temperature: float = GENERATION_TEMPERATURE
    max_tokens: int = GENERATION_MAX_TOKENS

    def get_api_key(self) -> str | None:
        """Get API key from config or environment."""
        if self.api_key:
            return self.api_key
        if self.api_key_env:
            return os.getenv(self.api_key_env)
        return None

    def has_valid_credential(self) -> bool:
        """Whether this provider is usable (enabled with a real key)."""
        return self.enabled and is_valid_credential(self.get_api_key(), self.placeholder)


class WhatsAppSettings(BaseSettings):
    """Twilio WhatsApp credentials, read from the environment or .env."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    twilio_account_sid: str | None = None
    twilio_auth_token: str | None = None
    whatsapp_to_number: str | None = None
    twilio_whatsapp_number: str = "+14155238886"

    @property
    def is_configured(self) -> bool:
        """Live sending needs both the account SID and auth token."""
        return is_valid_credential(self.twilio_account_sid) and is_valid_credential(
            self.twilio_auth_token
        )


class ContentConfig(BaseModel):
    """Where generated documents are stored."""

    content_dir: Path | None = None
    simulated_send_delay_seconds: float | None = None

    def get_content_dir(self) -> Path:
        """Get content directory from config or the project default."""
        return Path(self.content_dir) if self.content_dir else get_content_dir()


def _default_text_providers() -> dict[str, TextProviderConfig]:
    return {
        ProviderId.OPENAI.value: TextProviderConfig(
            model="gpt-4",
            api_key_env="OPENAI_API_KEY",
            placeholder="your_openai_api_key_here",
        ),
        ProviderId.PERPLEXITY.value: TextProviderConfig(
            model="sonar",
            api_key_env="PERPLEXITY_API_KEY",
            placeholder="your_perplexity_api_key_here",
        ),
    }


class ProviderConfig(BaseModel):
    """Full configuration: AI providers, message channel and content store."""

    provider_settings: ProviderSettings = Field(default_factory=ProviderSettings)
    text_providers: dict[str, TextProviderConfig] = Field(default_factory=_default_text_providers)
    whatsapp: WhatsAppSettings = Field(default_factory=WhatsAppSettings)
    content: ContentConfig = Field(default_factory=ContentConfig)

    def get_text_provider(self, provider: ProviderId | str) -> TextProviderConfig | None:
        """Get configuration for one provider, if declared."""
        key = provider.value if isinstance(provider, ProviderId) else str(provider)
        return self.text_providers.get(key)

    def credentials(self) -> dict[ProviderId, str | None]:
        """Map every supported provider to its valid secret, or None."""
        creds: dict[ProviderId, str | None] = {}
        for provider in ProviderId:
            config = self.get_text_provider(provider)
            if config is not None and config.has_valid_credential():
                creds[provider] = config.get_api_key()
            else:
                creds[provider] = None
        return creds


def load_provider_config(config_path: Path | None = None) -> ProviderConfig:
    """Load provider configuration from YAML file."""
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        # Return default config if file doesn't exist
        return ProviderConfig()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return ProviderConfig(**data)
