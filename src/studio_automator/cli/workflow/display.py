"""Display functions for workflow commands - pure functions for Rich output."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ...content import WorkflowResult
from ...providers import ProviderStatus

_TASK_NAMES = {
    "message_delivery": "WhatsApp message",
    "document_creation": "Blog post",
}


def show_workflow_result(console: Console, result: WorkflowResult) -> None:
    """Display the summary and per-task outcomes of one request."""
    if not result.tasks:
        border = "red" if "error" in result.metadata else "cyan"
    elif result.failed_count == 0:
        border = "green"
    elif result.completed_count == 0:
        border = "red"
    else:
        border = "yellow"

    intent = result.metadata.get("intent")
    title = f"Studio Assistant ({intent})" if intent else "Studio Assistant"
    console.print(Panel(Text(result.summary_text), title=title, border_style=border))

    if not result.tasks:
        return

    table = Table(title="Tasks")
    table.add_column("Task", style="cyan")
    table.add_column("Status")
    table.add_column("Detail", overflow="fold")

    for task in result.tasks:
        status = "[green]completed[/green]" if task.succeeded else "[red]failed[/red]"
        table.add_row(_TASK_NAMES.get(task.kind.value, task.kind.value), status, Text(task.detail))

    console.print(table)

    if result.metadata.get("whatsappSimulated"):
        console.print("[dim]WhatsApp is not configured: the message was simulated.[/dim]")


def show_provider_status(console: Console, status: ProviderStatus) -> None:
    """Display availability of every provider."""
    table = Table(title="AI Providers")
    table.add_column("Provider", style="cyan")
    table.add_column("Available")
    table.add_column("Active")

    for provider, available in status.providers.items():
        table.add_row(
            provider.value,
            "[green]yes[/green]" if available else "[red]no[/red]",
            "[bold green]*[/bold green]" if provider == status.current_provider else "",
        )

    console.print(table)


def show_no_providers(console: Console, availability: dict[str, bool]) -> None:
    """Display provider table when no provider has a valid key."""
    table = Table(title="AI Providers")
    table.add_column("Provider", style="cyan")
    table.add_column("Available")

    for name, available in availability.items():
        table.add_row(name, "[green]yes[/green]" if available else "[red]no[/red]")

    console.print(table)
    console.print(
        "[yellow]No AI provider is configured. "
        "Set OPENAI_API_KEY or PERPLEXITY_API_KEY in your .env file.[/yellow]"
    )


def show_chat_banner(console: Console, status: ProviderStatus) -> None:
    """Display the interactive chat header."""
    console.print(Panel(
        "Describe your event and I'll create the content.\n\n"
        '[cyan]"Send a message about ..."[/cyan]     WhatsApp message\n'
        '[cyan]"Write a blog post about ..."[/cyan]  Website post\n'
        '[cyan]"Create everything for ..."[/cyan]    Both at once\n\n'
        f"Provider: [yellow]{status.current_provider.value}[/yellow]\n"
        "[dim]Commands: /provider <id>, /status, /quit[/dim]",
        title="Studio Chat",
        border_style="cyan",
    ))
