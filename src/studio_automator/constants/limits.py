"""Limit constants for Studio Automator.

This module contains all limits and constraints:
- Generated content size targets
- Filename derivation bounds
- Intent classification confidences

AI CONTEXT:
-----------
Message limits follow WhatsApp/SMS conventions (160 characters keeps a
message readable in a notification preview). Filename limits keep generated
markdown names well below the 255-byte limit of common filesystems.

MODIFICATION GUIDE:
------------------
- MESSAGE_* and BLOG_* values are injected into prompts verbatim
- FILENAME_* values change stored post names; existing files are untouched
- CONFIDENCE_* values are part of the classifier's observable output
"""

from typing import Final

# =============================================================================
# GENERATED CONTENT
# =============================================================================

MESSAGE_TARGET_LENGTH: Final[int] = 160
"""Approximate character target for promotional messages."""

MESSAGE_MAX_EMOJIS: Final[int] = 4
"""Upper bound on emojis requested in a promotional message."""

BLOG_MIN_WORDS: Final[int] = 300
"""Minimum word count requested for blog posts."""

BLOG_MAX_WORDS: Final[int] = 500
"""Maximum word count requested for blog posts."""

GENERATION_MAX_TOKENS: Final[int] = 1000
"""Default completion budget for a single generation call."""

GENERATION_TEMPERATURE: Final[float] = 0.7
"""Default sampling temperature."""


# =============================================================================
# FILENAMES
# =============================================================================

FILENAME_MAX_TITLE_LENGTH: Final[int] = 100
"""Maximum length of the slug part of a post filename."""

FILENAME_SUFFIX_LENGTH: Final[int] = 6
"""Length of the random uniqueness suffix on truncated slugs."""

TITLE_MAX_LENGTH: Final[int] = 200
"""Declared titles longer than this are ignored for naming."""

FALLBACK_KEYWORD_COUNT: Final[int] = 5
"""Words taken from the request when no usable title exists."""

FALLBACK_KEYWORD_MIN_LENGTH: Final[int] = 3
"""Minimum length of a word kept for fallback filenames."""

FALLBACK_SLUG: Final[str] = "yoga-event"
"""Slug used when the request has no usable words."""


# =============================================================================
# INTENT CLASSIFICATION
# =============================================================================

CONFIDENCE_KEYWORD_MATCH: Final[float] = 0.8
"""Confidence assigned when a keyword family matches."""

CONFIDENCE_DEFAULT_CHAT: Final[float] = 0.6
"""Confidence of the keyword fallback's chat default."""

CONFIDENCE_ON_ERROR: Final[float] = 0.5
"""Confidence when the classification call itself failed."""


# =============================================================================
# DELIVERY
# =============================================================================

SIMULATED_SEND_DELAY_SECONDS: Final[float] = 1.0
"""Artificial latency of the simulated message sender."""

DELIVERY_TIMEOUT_SECONDS: Final[float] = 30.0
"""HTTP timeout for live message delivery."""

MESSAGE_LOG_PREVIEW_LENGTH: Final[int] = 100
"""Characters of a message body written to the delivery log."""
