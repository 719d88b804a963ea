"""Global constants package for Studio Automator.

This package centralizes the enums, protocols, limits and paths used
throughout the project. Import from here for consistency.

PACKAGE STRUCTURE:
-----------------
- paths.py    : Directory paths, file patterns
- limits.py   : Content targets, filename bounds, confidences
- status.py   : Provider ids, intent categories, task enums
- types.py    : TypedDicts, capability protocols

USAGE EXAMPLES:
--------------
    from studio_automator.constants import IntentCategory, TaskStatus
    from studio_automator.constants import GenerationCapability
    from studio_automator.constants import get_content_dir
"""

from .status import (
    ProviderId,
    IntentCategory,
    TaskKind,
    TaskStatus,
)
from .limits import (
    MESSAGE_TARGET_LENGTH,
    MESSAGE_MAX_EMOJIS,
    BLOG_MIN_WORDS,
    BLOG_MAX_WORDS,
    GENERATION_MAX_TOKENS,
    GENERATION_TEMPERATURE,
    FILENAME_MAX_TITLE_LENGTH,
    FILENAME_SUFFIX_LENGTH,
    TITLE_MAX_LENGTH,
    FALLBACK_KEYWORD_COUNT,
    FALLBACK_KEYWORD_MIN_LENGTH,
    FALLBACK_SLUG,
    CONFIDENCE_KEYWORD_MATCH,
    CONFIDENCE_DEFAULT_CHAT,
    CONFIDENCE_ON_ERROR,
    SIMULATED_SEND_DELAY_SECONDS,
    DELIVERY_TIMEOUT_SECONDS,
    MESSAGE_LOG_PREVIEW_LENGTH,
)
from .paths import (
    PROJECT_ROOT,
    POST_DATE_FORMAT,
    POST_FILENAME_PATTERN,
    POST_EXTENSION,
    get_project_root,
    get_config_path,
    get_content_dir,
    get_logs_dir,
)
from .types import (
    IntentResponseDict,
    GenerationCapability,
    MessageDeliveryCapability,
    DocumentPersistenceCapability,
)

__all__ = [
    # Status
    "ProviderId",
    "IntentCategory",
    "TaskKind",
    "TaskStatus",
    # Limits
    "MESSAGE_TARGET_LENGTH",
    "MESSAGE_MAX_EMOJIS",
    "BLOG_MIN_WORDS",
    "BLOG_MAX_WORDS",
    "GENERATION_MAX_TOKENS",
    "GENERATION_TEMPERATURE",
    "FILENAME_MAX_TITLE_LENGTH",
    "FILENAME_SUFFIX_LENGTH",
    "TITLE_MAX_LENGTH",
    "FALLBACK_KEYWORD_COUNT",
    "FALLBACK_KEYWORD_MIN_LENGTH",
    "FALLBACK_SLUG",
    "CONFIDENCE_KEYWORD_MATCH",
    "CONFIDENCE_DEFAULT_CHAT",
    "CONFIDENCE_ON_ERROR",
    "SIMULATED_SEND_DELAY_SECONDS",
    "DELIVERY_TIMEOUT_SECONDS",
    "MESSAGE_LOG_PREVIEW_LENGTH",
    # Paths
    "PROJECT_ROOT",
    "POST_DATE_FORMAT",
    "POST_FILENAME_PATTERN",
    "POST_EXTENSION",
    "get_project_root",
    "get_config_path",
    "get_content_dir",
    "get_logs_dir",
    # Types
    "IntentResponseDict",
    "GenerationCapability",
    "MessageDeliveryCapability",
    "DocumentPersistenceCapability",
]
