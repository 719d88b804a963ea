"""Content generation and workflow orchestration."""

from .generator import ContentGenerator, clean_message
from .models import TaskOutcome, WorkflowResult
from .orchestrator import WorkflowOrchestrator
from .prompts import build_blog_prompt, build_chat_prompt, build_message_prompt

__all__ = [
    "ContentGenerator",
    "clean_message",
    "TaskOutcome",
    "WorkflowResult",
    "WorkflowOrchestrator",
    "build_blog_prompt",
    "build_chat_prompt",
    "build_message_prompt",
]
