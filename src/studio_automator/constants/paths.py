"""Path-related constants for Studio Automator.

This module contains all directory paths and file patterns:
- Project directory structure
- Content store location
- Log and config locations

AI CONTEXT:
-----------
The project uses a flat folder structure at the project root:
  config/providers.yaml      provider and channel configuration
  content/events/*.md        generated blog posts
  logs/*.log                 AI call, workflow and delivery logs

MODIFICATION GUIDE:
------------------
- Change *_DIR_NAME constants to reorganize project structure
- POST_FILENAME_PATTERN controls stored post names
"""

from pathlib import Path
from typing import Final


# =============================================================================
# PROJECT ROOT DETECTION
# =============================================================================

def get_project_root() -> Path:
    """Get the project root directory.

    Walks up from this file to find the directory containing 'config' or
    'pyproject.toml'. Falls back to current working directory if not found.

    Returns:
        Path to project root directory.
    """
    current = Path(__file__).resolve().parent

    for _ in range(10):  # Max 10 levels up
        if (current / "config").is_dir() or (current / "pyproject.toml").exists():
            return current
        parent = current.parent
        if parent == current:  # Reached filesystem root
            break
        current = parent

    return Path.cwd()


# =============================================================================
# MAIN DIRECTORIES
# =============================================================================

PROJECT_ROOT: Path = get_project_root()
"""Project root directory. Auto-detected from file location."""

CONFIG_DIR_NAME: Final[str] = "config"
"""Name of the configuration directory."""

LOGS_DIR_NAME: Final[str] = "logs"
"""Name of the logs directory."""

CONTENT_DIR_NAME: Final[str] = "content"
"""Name of the generated content directory."""

EVENTS_DIR_NAME: Final[str] = "events"
"""Subdirectory of content holding event blog posts."""

PROVIDERS_CONFIG_FILENAME: Final[str] = "providers.yaml"
"""Provider configuration file inside the config directory."""


# =============================================================================
# FILE NAMING PATTERNS
# =============================================================================

POST_DATE_FORMAT: Final[str] = "%Y-%m-%d"
"""Date prefix of stored post filenames."""

POST_FILENAME_PATTERN: Final[str] = "{date}-{slug}.md"
"""Stored post filename (e.g., '2024-06-01-sunrise-yoga.md')."""

POST_EXTENSION: Final[str] = ".md"
"""Extension of stored posts."""


# =============================================================================
# PATH HELPERS
# =============================================================================

def get_config_path() -> Path:
    """Get the default provider configuration file path."""
    return PROJECT_ROOT / CONFIG_DIR_NAME / PROVIDERS_CONFIG_FILENAME


def get_content_dir() -> Path:
    """Get the default directory for generated blog posts."""
    return PROJECT_ROOT / CONTENT_DIR_NAME / EVENTS_DIR_NAME


def get_logs_dir() -> Path:
    """Get the logs directory, creating it if needed."""
    logs_dir = PROJECT_ROOT / LOGS_DIR_NAME
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir
