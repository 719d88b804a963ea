"""Prompt templates for content generation."""

from __future__ import annotations

from ..constants import (
    BLOG_MAX_WORDS,
    BLOG_MIN_WORDS,
    MESSAGE_MAX_EMOJIS,
    MESSAGE_TARGET_LENGTH,
)

MESSAGE_PROMPT = """Create a WhatsApp message for a yoga studio event: {description}

Requirements:
- Casual, friendly tone
- Keep under {max_length} characters if possible
- Include key event details
- Add a call-to-action
- Use emojis appropriately (max {max_emojis} emojis)

Return only the message text, no additional formatting or quotes."""

BLOG_PROMPT = """Create a website blog post for a yoga studio event: {description}

Requirements:
- SEO-friendly title and content
- Include frontmatter with title, date, tags, description
- Professional but warm tone
- Include event details, benefits, and registration info
- Use proper markdown formatting
- {min_words}-{max_words} words

Format the frontmatter exactly like this:
---
title: "Event Title"
date: "{today}"
tags: ["yoga", "workshop", "wellness"]
description: "Brief description for SEO"
---

Then include the full blog post content below."""

CHAT_PROMPT = """You are a helpful yoga studio content assistant. The user said: "{message}".

Provide a helpful, informative response. If they seem to want to create content, suggest using specific commands like:

- "Send a message about [event]" for WhatsApp messages
- "Write a blog post about [topic]" for written content
- "Create everything for [event]" for complete workflow

Keep your response friendly, professional, and focused on yoga/wellness content creation."""


def build_message_prompt(description: str) -> str:
    """Prompt for a short promotional WhatsApp message."""
    return MESSAGE_PROMPT.format(
        description=description,
        max_length=MESSAGE_TARGET_LENGTH,
        max_emojis=MESSAGE_MAX_EMOJIS,
    )


def build_blog_prompt(description: str, today: str) -> str:
    """Prompt for a markdown blog post with front-matter."""
    return BLOG_PROMPT.format(
        description=description,
        min_words=BLOG_MIN_WORDS,
        max_words=BLOG_MAX_WORDS,
        today=today,
    )


def build_chat_prompt(message: str) -> str:
    """Prompt for a conversational reply that suggests the commands."""
    return CHAT_PROMPT.format(message=message)
