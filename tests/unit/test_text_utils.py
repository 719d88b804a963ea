"""Unit tests for text helpers."""

from __future__ import annotations

import re

from studio_automator.utils import extract_keywords, random_token, slugify, strip_code_fence


class TestSlugify:

    def test_basic(self):
        assert slugify("  Sunrise   Yoga -- Workshop! ") == "sunrise-yoga-workshop"

    def test_only_symbols_gives_empty_slug(self):
        assert slugify("!!! ???") == ""


class TestExtractKeywords:

    def test_skips_short_words_and_limits_count(self):
        text = "A calm yin session by the sea at dawn with tea"
        assert extract_keywords(text) == ["calm", "yin", "session", "the", "sea"]

    def test_custom_limits(self):
        assert extract_keywords("Restorative yoga tonight", count=2, min_length=5) == ["restorative", "tonight"]


def test_random_token_alphabet():
    token = random_token(6)
    assert re.fullmatch(r"[a-z0-9]{6}", token)


def test_strip_code_fence():
    assert strip_code_fence("```json\n{\"a\": 1}\n```") == '{"a": 1}'
    assert strip_code_fence("  plain text  ") == "plain text"
