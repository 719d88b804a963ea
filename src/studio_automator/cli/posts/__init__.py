"""Posts feature - browse stored blog posts."""

from .commands import delete_post, list_posts, show_post_command
from .display import show_post, show_posts_table

__all__ = [
    "delete_post",
    "list_posts",
    "show_post_command",
    "show_post",
    "show_posts_table",
]
