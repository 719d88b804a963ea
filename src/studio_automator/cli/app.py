"""Typer app configuration and logging setup."""

from __future__ import annotations

import logging
import warnings

import typer
from dotenv import load_dotenv

from ..constants import get_logs_dir

# Load environment variables from .env file
load_dotenv()

# Suppress httpx/asyncio cleanup warnings
warnings.filterwarnings("ignore", message=".*Event loop is closed.*")
warnings.filterwarnings("ignore", category=ResourceWarning)

# File-only loggers: full AI traffic, workflow decisions, message and post delivery
FILE_LOGGERS = {
    "ai_calls": "ai_calls.log",
    "workflow": "workflow.log",
    "delivery": "delivery.log",
}

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

# Create Typer app
app = typer.Typer(
    name="studio",
    help="AI content assistant for yoga studios: WhatsApp messages and blog posts",
    add_completion=False,
)


def register_commands() -> None:
    """Register all commands from feature modules."""
    from .workflow.commands import chat, providers, run

    app.command(name="run")(run)
    app.command(name="chat")(chat)
    app.command(name="providers")(providers)

    from .posts.commands import delete_post, list_posts, show_post_command

    app.command(name="posts")(list_posts)
    app.command(name="show-post")(show_post_command)
    app.command(name="delete-post")(delete_post)


def setup_logging() -> None:
    """Configure logging for CLI.

    - Suppresses console output from libraries
    - Sets up file logging for AI calls, workflow and delivery
    """
    log_dir = get_logs_dir()

    # Remove any default console handlers from root logger
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.CRITICAL)

    # Suppress loggers that might print to console
    for logger_name in ["httpx", "httpcore", "urllib3", "asyncio", "agno"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)
        logger.propagate = False

    for logger_name, filename in FILE_LOGGERS.items():
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        logger.handlers = []  # Clear any existing handlers
        file_handler = logging.FileHandler(log_dir / filename, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)


# Initialize logging on module import
setup_logging()

# Register all commands
register_commands()


def main() -> None:
    """CLI entry point."""
    app()
