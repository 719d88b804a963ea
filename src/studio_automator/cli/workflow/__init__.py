"""Workflow feature - run requests and manage AI providers."""

from .commands import chat, create_orchestrator, providers, run
from .display import show_provider_status, show_workflow_result

__all__ = [
    "chat",
    "create_orchestrator",
    "providers",
    "run",
    "show_provider_status",
    "show_workflow_result",
]
