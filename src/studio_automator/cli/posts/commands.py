"""Post CLI commands - browse and remove stored blog posts."""

from __future__ import annotations

import typer

from ...delivery import MarkdownPostStore
from ...errors import PersistenceError
from ...providers import load_provider_config
from ..core.console import console, print_error, print_success
from .display import show_post, show_posts_table


def _store() -> MarkdownPostStore:
    return MarkdownPostStore(load_provider_config().content.get_content_dir())


def list_posts() -> None:
    """List stored blog posts, newest first."""
    show_posts_table(console, _store().list_posts())


def show_post_command(
    filename: str = typer.Argument(..., help="Post filename, e.g. 2024-06-01-sunrise-yoga.md"),
) -> None:
    """Show one stored blog post."""
    try:
        post = _store().get_post(filename)
    except PersistenceError as e:
        print_error(str(e))
        raise typer.Exit(1)
    show_post(console, post)


def delete_post(
    filename: str = typer.Argument(..., help="Post filename to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete one stored blog post."""
    if not yes and not typer.confirm(f"Delete {filename}?"):
        console.print("[dim]Cancelled.[/dim]")
        return

    try:
        _store().delete_post(filename)
    except PersistenceError as e:
        print_error(str(e))
        raise typer.Exit(1)
    print_success(f"Deleted {filename}")
