"""Display functions for post commands - pure functions for Rich output."""

from __future__ import annotations

from typing import List

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...delivery import StoredPost


def show_posts_table(console: Console, posts: List[StoredPost]) -> None:
    """Display table of stored blog posts."""
    if not posts:
        console.print("[yellow]No posts found.[/yellow]")
        return

    table = Table(title="Blog Posts")
    table.add_column("Date", style="yellow")
    table.add_column("Title", style="cyan")
    table.add_column("Tags", style="green")
    table.add_column("File", style="dim")

    for post in posts:
        table.add_row(
            post.date or "-",
            escape(post.title or "(untitled)"),
            escape(", ".join(post.tags)),
            post.filename,
        )

    console.print(table)


def show_post(console: Console, post: StoredPost) -> None:
    """Display one post with its front-matter."""
    header = [f"File: [dim]{post.filename}[/dim]"]
    if post.date:
        header.append(f"Date: [yellow]{post.date}[/yellow]")
    if post.tags:
        header.append(f"Tags: [green]{escape(', '.join(post.tags))}[/green]")
    if post.description:
        header.append(f"Description: {escape(post.description)}")

    console.print(Panel("\n".join(header), title=escape(post.title or "(untitled)"), border_style="cyan"))
    console.print(Markdown(post.body))
