"""Type definitions for Studio Automator.

This module contains the capability protocols the orchestration core
consumes, plus the shape of structured model answers:
- GenerationCapability: prompt in, text out
- MessageDeliveryCapability: message body in, receipt out
- DocumentPersistenceCapability: document in, filename out

AI CONTEXT:
-----------
The core never imports a concrete backend. Anything implementing these
protocols can be injected into the classifier, generator or orchestrator,
which is how the tests substitute fakes.

MODIFICATION GUIDE:
------------------
- Keep protocols minimal; adapters may expose more methods
- Use TypedDict for dict-like structures with known keys
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Protocol,
    TypedDict,
    runtime_checkable,
)

if TYPE_CHECKING:
    from ..delivery.models import DeliveryReceipt


# =============================================================================
# TYPED DICTS
# =============================================================================

class IntentResponseDict(TypedDict, total=False):
    """Expected JSON object from the intent classification prompt.

    Attributes:
        intent: One of the intent category values.
        confidence: Confidence between 0 and 1.
        rationale: Short explanation of the choice.
        category: Accepted in place of intent.
        description: Accepted in place of rationale.
    """
    intent: str
    confidence: float
    rationale: str
    category: str
    description: str


# =============================================================================
# PROTOCOL DEFINITIONS
# =============================================================================

@runtime_checkable
class GenerationCapability(Protocol):
    """Protocol for text generation backends.

    Implementations raise GenerationError when no text can be produced.
    """

    async def generate(self, prompt: str) -> str:
        """Generate text from a prompt.

        Args:
            prompt: Input prompt text.

        Returns:
            Generated text response.
        """
        ...


@runtime_checkable
class MessageDeliveryCapability(Protocol):
    """Protocol for message channels.

    Implementations raise DeliveryError when the message cannot be sent.
    """

    async def send(self, body: str) -> "DeliveryReceipt":
        """Send a message body to the configured recipient."""
        ...


@runtime_checkable
class DocumentPersistenceCapability(Protocol):
    """Protocol for document stores.

    Implementations raise PersistenceError on I/O failure.
    """

    async def save(self, content: str, source_text: str) -> str:
        """Persist a document and return its filename.

        Args:
            content: Full document text.
            source_text: Original request, used for naming fallbacks.
        """
        ...
