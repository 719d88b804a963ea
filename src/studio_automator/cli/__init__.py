"""Command-line interface for Studio Automator.

Feature packages:
- core/: Shared console helpers
- workflow/: Run requests, interactive chat, provider status
- posts/: Browse and delete stored blog posts

Usage:
    studio run "Create everything for our Saturday sunrise flow"
    studio chat --provider perplexity
    studio posts
"""

from .app import app, main

__all__ = ["app", "main"]
