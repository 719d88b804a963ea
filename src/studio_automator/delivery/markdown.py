"""Markdown blog post store.

Posts are plain markdown files with YAML front-matter, written to one flat
directory and named `YYYY-MM-DD-<slug>.md`.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from ..constants import (
    FALLBACK_KEYWORD_COUNT,
    FALLBACK_KEYWORD_MIN_LENGTH,
    FALLBACK_SLUG,
    FILENAME_MAX_TITLE_LENGTH,
    FILENAME_SUFFIX_LENGTH,
    POST_DATE_FORMAT,
    POST_EXTENSION,
    POST_FILENAME_PATTERN,
    TITLE_MAX_LENGTH,
    get_content_dir,
)
from ..errors import PersistenceError
from ..utils import extract_keywords, random_token, slugify
from .models import StoredPost

_logger = logging.getLogger("delivery")

_FRONTMATTER_PATTERN = re.compile(r"^\s*---[ \t]*\n(.*?)\n---[ \t]*(?:\n|$)", re.DOTALL)


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split a markdown document into front-matter and body.

    Returns an empty mapping (and the whole text as body) when the document
    has no front-matter block or the block is not a YAML mapping.
    """
    match = _FRONTMATTER_PATTERN.match(content)
    if not match:
        return {}, content

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        _logger.debug(f"Unparsable front-matter: {e}")
        return {}, content

    if not isinstance(data, dict):
        return {}, content
    return data, content[match.end():]


def _title_source(title: Any) -> str | None:
    if title is None:
        return None
    text = str(title).strip()
    if not text or len(text) > TITLE_MAX_LENGTH:
        return None
    return text


def _fallback_source(source_text: str) -> str:
    words = extract_keywords(
        source_text,
        count=FALLBACK_KEYWORD_COUNT,
        min_length=FALLBACK_KEYWORD_MIN_LENGTH,
    )
    return "-".join(words) if words else FALLBACK_SLUG


def derive_filename(title: Any, source_text: str, today: date | None = None) -> str:
    """Derive a date-prefixed, filesystem-safe filename.

    Args:
        title: Declared document title (ignored when empty or over 200 chars).
        source_text: Original request, used when no usable title exists.
        today: Date prefix (defaults to today).

    Returns:
        Filename like '2024-06-01-sunrise-yoga-workshop.md'. Slugs longer
        than 100 characters are cut and end with a random 6-character suffix.
    """
    source = _title_source(title)
    slug = slugify(source) if source else ""
    if not slug:
        # Titles made only of symbols produce an empty slug
        slug = slugify(_fallback_source(source_text)) or FALLBACK_SLUG

    if len(slug) > FILENAME_MAX_TITLE_LENGTH:
        keep = FILENAME_MAX_TITLE_LENGTH - FILENAME_SUFFIX_LENGTH - 2
        slug = f"{slug[:keep].rstrip('-')}-{random_token(FILENAME_SUFFIX_LENGTH)}"

    day = (today or date.today()).strftime(POST_DATE_FORMAT)
    return POST_FILENAME_PATTERN.format(date=day, slug=slug)


class MarkdownPostStore:
    """Stores generated blog posts on disk.

    Responsibilities:
    - Naming posts from their front-matter title
    - Writing, listing, reading and deleting posts

    Usage:
        store = MarkdownPostStore(Path("content/events"))
        filename = await store.save(markdown, "Sunrise yoga this Saturday")
    """

    def __init__(self, content_dir: Path | None = None):
        """Initialize the store.

        Args:
            content_dir: Directory for posts (defaults to content/events).
        """
        self.content_dir = Path(content_dir) if content_dir else get_content_dir()

    def _resolve(self, filename: str) -> Path:
        if not filename or Path(filename).name != filename:
            raise PersistenceError(f"Invalid post filename: {filename!r}")
        return self.content_dir / filename

    async def save(self, content: str, source_text: str) -> str:
        """Write a post and return its filename.

        Args:
            content: Markdown with optional YAML front-matter.
            source_text: Original request, used for naming fallbacks.

        Raises:
            PersistenceError: On any filesystem error.
        """
        frontmatter, _ = parse_frontmatter(content)
        filename = derive_filename(frontmatter.get("title"), source_text)

        try:
            self.content_dir.mkdir(parents=True, exist_ok=True)
            (self.content_dir / filename).write_text(content, encoding="utf-8")
        except OSError as e:
            _logger.error(f"POST_SAVE_ERROR | filename:{filename} | error:{e}")
            raise PersistenceError(e) from e

        _logger.info(
            f"POST_SAVED | filename:{filename} | dir:{self.content_dir} | "
            f"title:{frontmatter.get('title')} | date:{frontmatter.get('date')}"
        )
        return filename

    def _load(self, path: Path) -> StoredPost:
        content = path.read_text(encoding="utf-8")
        frontmatter, body = parse_frontmatter(content)

        tags = frontmatter.get("tags") or []
        if not isinstance(tags, list):
            tags = [tags]

        post_date = frontmatter.get("date")
        title = frontmatter.get("title")
        description = frontmatter.get("description")

        return StoredPost(
            filename=path.name,
            title=str(title) if title is not None else None,
            date=str(post_date) if post_date is not None else None,
            tags=[str(tag) for tag in tags],
            description=str(description) if description is not None else None,
            frontmatter=frontmatter,
            body=body.strip(),
        )

    def list_posts(self) -> list[StoredPost]:
        """Get all posts, newest front-matter date first."""
        if not self.content_dir.exists():
            return []

        posts: list[StoredPost] = []
        for path in self.content_dir.glob(f"*{POST_EXTENSION}"):
            try:
                posts.append(self._load(path))
            except (OSError, UnicodeDecodeError) as e:
                _logger.warning(f"Skipping unreadable post {path.name}: {e}")

        posts.sort(key=lambda post: post.date or "", reverse=True)
        return posts

    def get_post(self, filename: str) -> StoredPost:
        """Read one post.

        Raises:
            PersistenceError: If the post does not exist or cannot be read.
        """
        path = self._resolve(filename)
        if not path.is_file():
            raise PersistenceError(f"Post not found: {filename}")
        try:
            return self._load(path)
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(e) from e

    def delete_post(self, filename: str) -> None:
        """Delete one post.

        Raises:
            PersistenceError: If the post does not exist or cannot be removed.
        """
        path = self._resolve(filename)
        if not path.is_file():
            raise PersistenceError(f"Post not found: {filename}")
        try:
            path.unlink()
        except OSError as e:
            raise PersistenceError(e) from e
        _logger.info(f"POST_DELETED | filename:{filename}")
