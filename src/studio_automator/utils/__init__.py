"""Utility modules for Studio Automator."""

from .text import extract_keywords, random_token, slugify, strip_code_fence

__all__ = [
    "extract_keywords",
    "random_token",
    "slugify",
    "strip_code_fence",
]
