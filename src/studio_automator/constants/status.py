"""Status enums and closed value sets for Studio Automator.

This module contains every enum the orchestration core branches on:
- Supported AI provider identifiers
- Intent categories produced by the classifier
- Task kinds and task outcome states

AI CONTEXT:
-----------
A request moves through one short state machine:
  CLASSIFY -> DISPATCH -> (pipelines) -> AGGREGATE

Each pipeline ends in exactly one TaskStatus. The orchestrator maps every
IntentCategory to a handler; adding a category without a handler is caught
at import time.

MODIFICATION GUIDE:
------------------
- Add new enum values at the END to maintain backwards compatibility
- Each enum value carries a docstring describing it
- Use .value for string representation when needed
"""

from enum import Enum


# =============================================================================
# AI PROVIDERS
# =============================================================================

class ProviderId(str, Enum):
    """Supported text-generation providers."""

    OPENAI = "openai"
    """OpenAI chat completions."""

    PERPLEXITY = "perplexity"
    """Perplexity Sonar chat completions."""

    @classmethod
    def values(cls) -> list[str]:
        """Get all identifiers as plain strings."""
        return [member.value for member in cls]


# =============================================================================
# INTENT
# =============================================================================

class IntentCategory(str, Enum):
    """Classified purpose of a free-text request.

    Workflow:
        CHAT          -> reply only, no side effects
        POST_MESSAGE  -> generate message -> deliver
        CREATE_BLOG   -> generate post -> persist
        WORKFLOW      -> POST_MESSAGE + CREATE_BLOG concurrently
    """

    CHAT = "chat"
    """Conversation or questions, no delivery."""

    POST_MESSAGE = "post_message"
    """Send or post a promotional message."""

    CREATE_BLOG = "create_blog"
    """Write a blog post or article."""

    WORKFLOW = "workflow"
    """Do everything: message and blog post."""


# =============================================================================
# TASKS
# =============================================================================

class TaskKind(str, Enum):
    """Kind of side-effecting pipeline."""

    MESSAGE_DELIVERY = "message_delivery"
    """Generated message sent through the message channel."""

    DOCUMENT_CREATION = "document_creation"
    """Generated blog post written to the content store."""


class TaskStatus(str, Enum):
    """Terminal state of one pipeline."""

    COMPLETED = "completed"
    """Generation and delivery both succeeded."""

    FAILED = "failed"
    """Generation or delivery failed; detail holds the error."""
