"""Workflow orchestrator: classify a request, run its pipelines, report back.

This is the main entry point of the core. It wires the intent classifier,
the content generator and the delivery adapters together:

    request -> classify -> dispatch -> pipeline(s) -> WorkflowResult

Each pipeline (generate then deliver, or generate then persist) records its
own TaskOutcome. A failing pipeline never aborts its sibling, and `handle()`
never raises.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from ..constants import (
    DocumentPersistenceCapability,
    IntentCategory,
    MessageDeliveryCapability,
    ProviderId,
    TaskKind,
)
from ..errors import DeliveryError
from ..intent import IntentClassifier
from ..providers.failover import ProviderSelector, ProviderState, ProviderStatus
from .generator import ContentGenerator
from .models import TaskOutcome, WorkflowResult

if TYPE_CHECKING:
    from ..providers.config import ProviderConfig

_logger = logging.getLogger("workflow")

# Every category must map to a handler; checked below at import time.
_DISPATCH: dict[IntentCategory, str] = {
    IntentCategory.CHAT: "_handle_chat",
    IntentCategory.POST_MESSAGE: "_handle_post_message",
    IntentCategory.CREATE_BLOG: "_handle_create_blog",
    IntentCategory.WORKFLOW: "_handle_workflow",
}

_missing_handlers = set(IntentCategory) - set(_DISPATCH)
if _missing_handlers:
    raise RuntimeError(f"No workflow handler for intents: {sorted(c.value for c in _missing_handlers)}")

_TASK_LABELS = {
    TaskKind.MESSAGE_DELIVERY: "WhatsApp Message",
    TaskKind.DOCUMENT_CREATION: "Website Post",
}


def _render_task_line(outcome: TaskOutcome) -> str:
    label = _TASK_LABELS[outcome.kind]
    if not outcome.succeeded:
        return f"[failed] {label}: {outcome.detail}"
    if outcome.kind == TaskKind.MESSAGE_DELIVERY:
        return f"[done] {label}: Sent to your configured number"
    return f"[done] {label}: Created as {outcome.detail}"


def _error_text(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


class WorkflowOrchestrator:
    """Routes requests to content pipelines.

    Collaborators are injected; anything not provided is built from the
    provider configuration:
    - ProviderSelector: generation with primary/fallback providers
    - IntentClassifier: picks the pipeline(s)
    - ContentGenerator: prompts and output cleanup
    - message sender: WhatsApp (live or simulated)
    - document store: markdown posts on disk

    Usage:
        orchestrator = WorkflowOrchestrator()
        result = await orchestrator.handle("Create everything for our summer festival")
        print(result.summary_text)
    """

    def __init__(
        self,
        providers: ProviderSelector | None = None,
        message_sender: MessageDeliveryCapability | None = None,
        document_store: DocumentPersistenceCapability | None = None,
        classifier: IntentClassifier | None = None,
        generator: ContentGenerator | None = None,
        config: "ProviderConfig | None" = None,
        provider_state: ProviderState | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            providers: Provider selector (built from config if not provided).
            message_sender: Message channel (live or simulated from config if not provided).
            document_store: Post store (created under the configured content dir if not provided).
            classifier: Intent classifier (uses `providers` if not provided).
            generator: Content generator (uses `providers` if not provided).
            config: Provider configuration (loaded from file when something must be built).
            provider_state: Shared provider pointer for a built selector.

        Raises:
            NoProviderConfigured: If a selector must be built and no provider has a key.
        """
        if config is None and (providers is None or message_sender is None or document_store is None):
            from ..providers.config import load_provider_config
            config = load_provider_config()

        if providers is None:
            providers = ProviderSelector.from_config(config, state=provider_state)
        self.providers = providers

        if message_sender is None:
            from ..delivery import create_message_sender
            message_sender = create_message_sender(
                config.whatsapp,
                config.content.simulated_send_delay_seconds,
            )
        self.message_sender = message_sender

        if document_store is None:
            from ..delivery import MarkdownPostStore
            document_store = MarkdownPostStore(config.content.get_content_dir())
        self.document_store = document_store

        self.classifier = classifier or IntentClassifier(providers)
        self.generator = generator or ContentGenerator(providers)

    # =========================================================================
    # Public contract
    # =========================================================================

    async def handle(self, message: str) -> WorkflowResult:
        """Process one request end to end.

        Returns:
            WorkflowResult. Failures are reported inside the result, never raised.
        """
        try:
            intent = await self.classifier.classify(message)
            _logger.info(
                f"INTENT | category:{intent.category.value} | confidence:{intent.confidence:.2f} | "
                f"rationale:{intent.rationale}"
            )

            handler_name = _DISPATCH.get(intent.category, "_handle_chat")
            handler: Callable[[str], Awaitable[WorkflowResult]] = getattr(self, handler_name)
            result = await handler(message)
        except Exception as e:
            _logger.exception(f"REQUEST_ERROR | message:{message[:80]!r} | error:{e}")
            return WorkflowResult(
                summary_text=(
                    f"I'm sorry, I encountered an error processing your request: {_error_text(e)}. "
                    "Please try again or rephrase your request."
                ),
                metadata={"error": _error_text(e)},
            )

        result.metadata.setdefault("intent", intent.category.value)
        result.metadata.setdefault("confidence", intent.confidence)

        for task in result.tasks:
            _logger.info(f"TASK | kind:{task.kind.value} | status:{task.status.value} | detail:{task.detail[:120]}")
        return result

    def get_provider_status(self) -> ProviderStatus:
        """Availability of every provider and the active one."""
        return self.providers.status()

    def switch_provider(self, provider: ProviderId | str) -> None:
        """Switch the active provider for all subsequent requests.

        Raises:
            InvalidProvider: If the identifier is not supported.
            ProviderUnavailable: If the provider has no valid credential.
        """
        self.providers.switch_provider(provider)

    # =========================================================================
    # Pipelines
    # =========================================================================

    async def _run_message_pipeline(self, description: str, metadata: dict[str, Any]) -> TaskOutcome:
        """Generate a promotional message, then deliver it."""
        try:
            message = await self.generator.generate_message(description)
            receipt = await self.message_sender.send(message)
        except DeliveryError as e:
            _logger.error(f"MESSAGE_PIPELINE_FAILED | stage:delivery | error:{e}")
            return TaskOutcome.failed(
                TaskKind.MESSAGE_DELIVERY,
                f"Failed to send WhatsApp message: {_error_text(e)}",
            )
        except Exception as e:
            _logger.error(f"MESSAGE_PIPELINE_FAILED | error:{e}")
            return TaskOutcome.failed(
                TaskKind.MESSAGE_DELIVERY,
                f"Failed to generate WhatsApp message: {_error_text(e)}",
            )

        metadata["whatsappMessage"] = message
        if receipt is not None:
            metadata["whatsappMessageId"] = receipt.message_id
            metadata["whatsappSimulated"] = receipt.simulated
        return TaskOutcome.completed(TaskKind.MESSAGE_DELIVERY, message)

    async def _run_blog_pipeline(self, description: str, metadata: dict[str, Any]) -> TaskOutcome:
        """Generate a blog post, then persist it."""
        try:
            post = await self.generator.generate_blog_post(description)
            filename = await self.document_store.save(post, description)
        except Exception as e:
            _logger.error(f"BLOG_PIPELINE_FAILED | error:{e}")
            return TaskOutcome.failed(
                TaskKind.DOCUMENT_CREATION,
                f"Failed to generate markdown post: {_error_text(e)}",
            )

        metadata["markdownFile"] = filename
        return TaskOutcome.completed(TaskKind.DOCUMENT_CREATION, filename)

    # =========================================================================
    # Intent handlers
    # =========================================================================

    async def _handle_post_message(self, message: str) -> WorkflowResult:
        metadata: dict[str, Any] = {}
        outcome = await self._run_message_pipeline(message, metadata)

        if outcome.succeeded:
            summary = (
                "I've generated and sent a WhatsApp message for you!\n\n"
                f"Message sent:\n{outcome.detail}\n\n"
                "The message has been sent to your configured WhatsApp number "
                "with a call-to-action."
            )
        else:
            summary = (
                f"I couldn't send the WhatsApp message. {outcome.detail}\n\n"
                "Please check your AI provider and WhatsApp settings and try again."
            )
        return WorkflowResult(summary_text=summary, tasks=[outcome], metadata=metadata)

    async def _handle_create_blog(self, message: str) -> WorkflowResult:
        metadata: dict[str, Any] = {}
        outcome = await self._run_blog_pipeline(message, metadata)

        if outcome.succeeded:
            summary = (
                "I've created a blog post for you!\n\n"
                f"File created: {outcome.detail}\n\n"
                "The blog post includes:\n"
                "- SEO-optimized title and content\n"
                "- Frontmatter with tags and description\n"
                "- Engaging content about your event\n"
                "- Proper markdown formatting\n\n"
                "You can find the file in your content directory and publish it to your website."
            )
        else:
            summary = (
                f"I couldn't create the blog post. {outcome.detail}\n\n"
                "Please check your AI provider and content directory and try again."
            )
        return WorkflowResult(summary_text=summary, tasks=[outcome], metadata=metadata)

    async def _handle_workflow(self, message: str) -> WorkflowResult:
        metadata: dict[str, Any] = {}
        pipelines = (
            (TaskKind.MESSAGE_DELIVERY, self._run_message_pipeline(message, metadata)),
            (TaskKind.DOCUMENT_CREATION, self._run_blog_pipeline(message, metadata)),
        )

        # Both pipelines start together; one failing never cancels the other
        results = await asyncio.gather(*(coro for _, coro in pipelines), return_exceptions=True)

        tasks: list[TaskOutcome] = []
        for (kind, _), result in zip(pipelines, results):
            if isinstance(result, BaseException):
                tasks.append(TaskOutcome.failed(kind, _error_text(result)))
            else:
                tasks.append(result)

        task_lines = "\n".join(_render_task_line(task) for task in tasks)
        completed = sum(1 for task in tasks if task.succeeded)

        if completed == len(tasks):
            summary = (
                "Complete workflow completed! I've created everything you need:\n\n"
                f"{task_lines}\n\n"
                "All content has been generated and distributed across your channels."
            )
        elif completed:
            summary = (
                f"Workflow partially completed: {completed} of {len(tasks)} tasks succeeded.\n\n"
                f"{task_lines}\n\n"
                "Check the task details below for what failed."
            )
        else:
            summary = (
                "The workflow could not be completed. All tasks failed:\n\n"
                f"{task_lines}\n\n"
                "Please check your settings and try again."
            )
        return WorkflowResult(summary_text=summary, tasks=tasks, metadata=metadata)

    async def _handle_chat(self, message: str) -> WorkflowResult:
        reply = await self.generator.generate_chat_reply(message)
        return WorkflowResult(summary_text=reply)
