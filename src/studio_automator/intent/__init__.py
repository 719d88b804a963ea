"""Intent classification for incoming requests."""

from .models import IntentResult
from .classifier import (
    KEYWORD_RULES,
    IntentClassifier,
    build_intent_prompt,
    classify_by_keywords,
    parse_intent_response,
)

__all__ = [
    "IntentResult",
    "KEYWORD_RULES",
    "IntentClassifier",
    "build_intent_prompt",
    "classify_by_keywords",
    "parse_intent_response",
]
