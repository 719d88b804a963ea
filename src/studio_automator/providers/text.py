"""Text generation backends using Agno framework.

One backend wraps one provider. Choosing between providers and failing
over is the job of `ProviderSelector` in failover.py.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from ..constants import ProviderId
from ..errors import GenerationError
from .config import ProviderConfig, TextProviderConfig

_logger = logging.getLogger("ai_calls")

DEFAULT_SYSTEM_PROMPT = (
    "You are a professional content creator specializing in yoga and wellness "
    "content. Create engaging, informative, and well-structured content based "
    "on the user's requirements."
)


def _create_agno_model(provider: ProviderId, provider_config: TextProviderConfig) -> Any:
    """Create an Agno model instance for the given provider.

    Agno provides unified interfaces for all major providers.
    """
    api_key = provider_config.get_api_key()

    # Import Agno models lazily to avoid import errors if not installed
    if provider == ProviderId.OPENAI:
        from agno.models.openai import OpenAIChat
        return OpenAIChat(
            id=provider_config.model,
            api_key=api_key,
            base_url=provider_config.base_url,
            temperature=provider_config.temperature,
            max_tokens=provider_config.max_tokens,
            timeout=provider_config.timeout,
        )

    elif provider == ProviderId.PERPLEXITY:
        from agno.models.perplexity import Perplexity
        return Perplexity(
            id=provider_config.model,
            api_key=api_key,
            temperature=provider_config.temperature,
            max_tokens=provider_config.max_tokens,
            timeout=provider_config.timeout,
        )

    raise GenerationError(getattr(provider, "value", provider), "unsupported provider")


class AgnoTextBackend:
    """Generation capability backed by a single Agno model.

    Usage:
        backend = AgnoTextBackend(ProviderId.OPENAI, config.text_providers["openai"])
        text = await backend.generate("Write a haiku about sunrise yoga")
    """

    def __init__(
        self,
        provider: ProviderId,
        provider_config: TextProviderConfig,
        system_prompt: str | None = DEFAULT_SYSTEM_PROMPT,
    ):
        self.provider = provider
        self.provider_config = provider_config
        self.system_prompt = system_prompt
        self._total_calls = 0

    @property
    def model_id(self) -> str:
        """Configured model identifier."""
        return self.provider_config.model

    @property
    def total_calls(self) -> int:
        """Number of successful generations."""
        return self._total_calls

    async def generate(self, prompt: str) -> str:
        """Generate text completion.

        Args:
            prompt: The user prompt to send to the model.

        Returns:
            Generated text response, stripped.

        Raises:
            GenerationError: On any provider failure or an empty response.
        """
        from agno.agent import Agent

        provider_name = self.provider.value
        start_time = time.time()

        _logger.info(
            f"AI_REQUEST | provider:{provider_name} | model:{self.model_id}\n"
            f"--- SYSTEM ---\n{self.system_prompt or '(none)'}\n"
            f"--- PROMPT ---\n{prompt}\n"
            f"--- END REQUEST ---"
        )

        try:
            model = _create_agno_model(self.provider, self.provider_config)
            agent = Agent(
                model=model,
                instructions=self.system_prompt,
                markdown=False,
            )
            response = await agent.arun(prompt)
        except Exception as e:
            _logger.warning(f"AI_ERROR | provider:{provider_name} | error:{e}")
            raise GenerationError(provider_name, e) from e

        result = response.content if response is not None else None
        if not isinstance(result, str) or not result.strip():
            _logger.warning(f"AI_ERROR | provider:{provider_name} | error:empty response")
            raise GenerationError(provider_name, f"No content generated from {provider_name}")

        duration = time.time() - start_time
        self._total_calls += 1

        _logger.info(
            f"AI_RESPONSE | provider:{provider_name} | model:{self.model_id} | "
            f"duration:{duration:.2f}s\n"
            f"--- RESPONSE ---\n{result}\n"
            f"--- END RESPONSE ---"
        )

        return result.strip()


def create_backends(
    config: ProviderConfig,
    system_prompt: str | None = DEFAULT_SYSTEM_PROMPT,
) -> dict[ProviderId, AgnoTextBackend]:
    """Create a backend for every declared, enabled provider."""
    backends: dict[ProviderId, AgnoTextBackend] = {}
    for provider in ProviderId:
        provider_config = config.get_text_provider(provider)
        if provider_config is None or not provider_config.enabled:
            continue
        backends[provider] = AgnoTextBackend(provider, provider_config, system_prompt)
    return backends
