"""Small text helpers shared by the generator and the adapters."""

from __future__ import annotations

import random
import re
import string

_CODE_FENCE_PATTERN = re.compile(r"^\s*```[a-zA-Z0-9_-]*\s*\n(.*?)\n\s*```\s*$", re.DOTALL)
_TOKEN_ALPHABET = string.ascii_lowercase + string.digits


def slugify(text: str) -> str:
    """Create a filesystem-safe slug.

    Keeps lowercase ASCII letters, digits, spaces and hyphens, turns spaces
    into hyphens and collapses repeated hyphens.
    """
    slug = text.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def extract_keywords(text: str, count: int = 5, min_length: int = 3) -> list[str]:
    """Get the first meaningful words of a text.

    Args:
        text: Free text (e.g., the original request).
        count: Maximum number of words returned.
        min_length: Words shorter than this are skipped.

    Returns:
        Lowercase alphanumeric words in order of appearance.
    """
    cleaned = re.sub(r"[^a-z0-9\s]", " ", text.lower())
    words = [word for word in cleaned.split() if len(word) >= min_length]
    return words[:count]


def random_token(length: int = 6) -> str:
    """Random lowercase alphanumeric token (not for security use)."""
    return "".join(random.choices(_TOKEN_ALPHABET, k=length))


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence, if the whole text is one."""
    match = _CODE_FENCE_PATTERN.match(text)
    if match:
        return match.group(1).strip()
    return text.strip()
