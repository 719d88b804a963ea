"""Intent classification: LLM first, keywords as a fallback.

The model is asked for a small JSON object. When its answer is not valid
JSON or names an unknown category, a fixed keyword table decides instead.
When the model call itself fails, the request is treated as chat. The
classifier therefore always returns an IntentResult.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, cast

from ..constants import (
    CONFIDENCE_DEFAULT_CHAT,
    CONFIDENCE_KEYWORD_MATCH,
    CONFIDENCE_ON_ERROR,
    GenerationCapability,
    IntentCategory,
    IntentResponseDict,
)
from ..utils import strip_code_fence
from .models import IntentResult

_logger = logging.getLogger("workflow")

INTENT_PROMPT = """Analyze this user message and determine their intent:

Message: "{message}"

Possible intents:
1. "chat" - User wants to have a conversation, ask questions, or get information
2. "post_message" - User wants to send/post a message to WhatsApp or social media
3. "create_blog" - User wants to create a blog post, article, or written content
4. "workflow" - User wants to do multiple things or create a complete workflow

Return ONLY a JSON object with:
{{
  "intent": "one_of_the_intents_above",
  "confidence": 0.0_to_1.0,
  "rationale": "brief explanation of why this intent was chosen"
}}

Focus on keywords like: message, send, post, share (for message); blog, article, write, content (for blog); multiple, all, everything, workflow (for workflow)."""

# Checked in order; the first family with a substring hit wins.
KEYWORD_RULES: tuple[tuple[IntentCategory, tuple[str, ...], str], ...] = (
    (
        IntentCategory.POST_MESSAGE,
        ("message", "send", "post"),
        "Keywords suggest message posting",
    ),
    (
        IntentCategory.CREATE_BLOG,
        ("blog", "article", "write"),
        "Keywords suggest blog creation",
    ),
    (
        IntentCategory.WORKFLOW,
        ("all", "everything", "workflow"),
        "Keywords suggest complete workflow",
    ),
)


def build_intent_prompt(message: str) -> str:
    """Prompt asking for a JSON intent classification."""
    return INTENT_PROMPT.format(message=message)


def classify_by_keywords(message: str) -> IntentResult:
    """Deterministic classification by case-insensitive substring match."""
    lowered = message.lower()
    for category, keywords, rationale in KEYWORD_RULES:
        if any(keyword in lowered for keyword in keywords):
            return IntentResult(
                category=category,
                confidence=CONFIDENCE_KEYWORD_MATCH,
                rationale=rationale,
            )
    return IntentResult(
        category=IntentCategory.CHAT,
        confidence=CONFIDENCE_DEFAULT_CHAT,
        rationale="Default to chat mode",
    )


def _parse_confidence(value: Any) -> float:
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return CONFIDENCE_ON_ERROR
    if not math.isfinite(confidence):
        return CONFIDENCE_ON_ERROR
    return min(1.0, max(0.0, confidence))


def parse_intent_response(text: str) -> IntentResult | None:
    """Parse the model's JSON answer.

    Returns None when the text is not a JSON object or its category is not
    one of the known intents.
    """
    try:
        data = json.loads(strip_code_fence(text))
    except (json.JSONDecodeError, TypeError):
        return None

    if not isinstance(data, dict):
        return None
    data = cast(IntentResponseDict, data)

    raw_category = data.get("intent", data.get("category"))
    if not isinstance(raw_category, str):
        return None
    try:
        category = IntentCategory(raw_category.strip().lower())
    except ValueError:
        return None

    rationale = data.get("rationale") or data.get("description") or "Intent analysis completed"

    return IntentResult(
        category=category,
        confidence=_parse_confidence(data.get("confidence", CONFIDENCE_ON_ERROR)),
        rationale=str(rationale),
    )


class IntentClassifier:
    """Classifies free text into an IntentCategory.

    Usage:
        classifier = IntentClassifier(selector)
        intent = await classifier.classify("Send a message about Saturday yoga")
        # IntentResult(category=POST_MESSAGE, confidence=0.9, ...)
    """

    def __init__(self, text_provider: GenerationCapability):
        self.text_provider = text_provider

    async def classify(self, message: str) -> IntentResult:
        """Classify a request. Never raises for generation or parsing failures."""
        try:
            response = await self.text_provider.generate(build_intent_prompt(message))
        except Exception as e:
            _logger.error(f"INTENT_ERROR | error:{e}")
            return IntentResult(
                category=IntentCategory.CHAT,
                confidence=CONFIDENCE_ON_ERROR,
                rationale=f"Error in intent analysis, defaulting to chat: {e}",
            )

        result = parse_intent_response(response)
        if result is not None:
            return result

        fallback = classify_by_keywords(message)
        _logger.warning(
            f"CLASSIFICATION_DEGRADED | unparsable response, keyword fallback -> "
            f"{fallback.category.value} | response:{str(response)[:200]!r}"
        )
        return fallback
