"""Workflow CLI commands - thin wrappers around the orchestrator."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer

from ...content import WorkflowOrchestrator
from ...errors import InvalidProvider, NoProviderConfigured, ProviderUnavailable
from ...providers import ProviderSelector, is_valid_credential, load_provider_config
from ..core.console import console, print_error, print_success, print_warning
from .display import (
    show_chat_banner,
    show_no_providers,
    show_provider_status,
    show_workflow_result,
)

_QUIT_COMMANDS = {"/quit", "/exit", "quit", "exit"}


def create_orchestrator(provider: Optional[str] = None) -> WorkflowOrchestrator:
    """Build an orchestrator from configuration, optionally pinning a provider.

    Raises:
        NoProviderConfigured: If no AI provider has a valid key.
        InvalidProvider: If `provider` is not a supported identifier.
        ProviderUnavailable: If `provider` has no valid key.
    """
    orchestrator = WorkflowOrchestrator()
    if provider:
        orchestrator.switch_provider(provider)
    return orchestrator


def _orchestrator_or_exit(provider: Optional[str]) -> WorkflowOrchestrator:
    try:
        return create_orchestrator(provider)
    except NoProviderConfigured as e:
        print_error(str(e), {"hint": "Set OPENAI_API_KEY or PERPLEXITY_API_KEY in .env"})
        raise typer.Exit(1)
    except (InvalidProvider, ProviderUnavailable) as e:
        print_error(str(e))
        raise typer.Exit(1)


def run(
    message: str = typer.Argument(..., help="What you need, e.g. 'Create everything for Saturday sunrise yoga'"),
    provider: Optional[str] = typer.Option(None, "--provider", "-p", help="AI provider (openai, perplexity)"),
) -> None:
    """Process one request: classify it and run the matching pipelines."""
    orchestrator = _orchestrator_or_exit(provider)

    with console.status("[cyan]Working on it...[/cyan]"):
        result = asyncio.run(orchestrator.handle(message))

    show_workflow_result(console, result)

    if result.tasks and result.completed_count == 0:
        raise typer.Exit(1)


def chat(
    provider: Optional[str] = typer.Option(None, "--provider", "-p", help="AI provider (openai, perplexity)"),
) -> None:
    """Interactive session with the studio assistant."""
    orchestrator = _orchestrator_or_exit(provider)
    show_chat_banner(console, orchestrator.get_provider_status())

    while True:
        try:
            message = console.input("[bold cyan]You[/bold cyan]: ").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if not message:
            continue
        if message.lower() in _QUIT_COMMANDS:
            break

        if message.startswith("/provider"):
            _, _, target = message.partition(" ")
            if not target.strip():
                print_error("Usage: /provider <openai|perplexity>")
                continue
            try:
                orchestrator.switch_provider(target.strip())
            except (InvalidProvider, ProviderUnavailable) as e:
                print_error(str(e))
                continue
            print_success(f"Switched to {target.strip()}")
            continue

        if message == "/status":
            show_provider_status(console, orchestrator.get_provider_status())
            continue

        with console.status("[cyan]Thinking...[/cyan]"):
            result = asyncio.run(orchestrator.handle(message))
        show_workflow_result(console, result)

    console.print("[dim]Goodbye![/dim]")


def providers() -> None:
    """Show AI provider availability."""
    config = load_provider_config()

    try:
        selector = ProviderSelector.from_config(config)
    except NoProviderConfigured:
        availability = {
            name: provider_config.has_valid_credential()
            for name, provider_config in config.text_providers.items()
        }
        show_no_providers(console, availability)
        raise typer.Exit(1)

    show_provider_status(console, selector.status())

    whatsapp = config.whatsapp
    mode = "live (Twilio)" if whatsapp.is_configured else "simulated"
    console.print(f"WhatsApp: [yellow]{mode}[/yellow]")
    if whatsapp.is_configured and not is_valid_credential(whatsapp.whatsapp_to_number):
        print_warning("WHATSAPP_TO_NUMBER is not set; sends will fail.")
    console.print(f"Posts: [yellow]{config.content.get_content_dir()}[/yellow]")
