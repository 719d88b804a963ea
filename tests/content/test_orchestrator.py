"""Tests for WorkflowOrchestrator routing, pipelines and summaries.

Collaborators are fakes: a scripted selector, a simulated or mocked
sender and a markdown store in a temporary directory.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from studio_automator.constants import IntentCategory, ProviderId, TaskKind, TaskStatus
from studio_automator.content import ContentGenerator, WorkflowOrchestrator
from studio_automator.errors import DeliveryError, InvalidProvider, PersistenceError, ProviderUnavailable
from studio_automator.intent import IntentResult

BLOG = """---
title: "Summer Solstice Flow"
date: "2024-06-21"
tags: ["yoga", "solstice"]
description: "Celebrate the longest day"
---

# Summer Solstice Flow

108 sun salutations at sunset.
"""


def _classifier(category: IntentCategory, confidence: float = 0.9) -> AsyncMock:
    classifier = AsyncMock()
    classifier.classify.return_value = IntentResult(
        category=category,
        confidence=confidence,
        rationale="test",
    )
    return classifier


def _generator(message="Solstice flow at sunset! Reply YES to join", blog=BLOG, chat="Hello!") -> AsyncMock:
    generator = AsyncMock(spec=ContentGenerator)
    for name, value in (
        ("generate_message", message),
        ("generate_blog_post", blog),
        ("generate_chat_reply", chat),
    ):
        method = getattr(generator, name)
        if isinstance(value, BaseException):
            method.side_effect = value
        else:
            method.return_value = value
    return generator


@pytest.fixture
def orchestrator_factory(make_selector, simulated_sender, post_store):
    def _make(category: IntentCategory, **overrides):
        selector, _, _ = make_selector()
        return WorkflowOrchestrator(
            providers=overrides.pop("providers", selector),
            message_sender=overrides.pop("message_sender", simulated_sender),
            document_store=overrides.pop("document_store", post_store),
            classifier=overrides.pop("classifier", _classifier(category)),
            generator=overrides.pop("generator", _generator()),
        )

    return _make


# =============================================================================
# Routing
# =============================================================================

class TestRouting:

    @pytest.mark.asyncio
    async def test_chat_returns_reply_without_tasks(self, orchestrator_factory, simulated_sender, content_dir):
        orchestrator = orchestrator_factory(IntentCategory.CHAT)

        result = await orchestrator.handle("What is yin yoga?")

        assert result.summary_text == "Hello!"
        assert result.tasks == []
        assert result.metadata["intent"] == "chat"
        assert simulated_sender.sent == []
        assert not content_dir.exists()

    @pytest.mark.asyncio
    async def test_post_message_runs_only_message_pipeline(self, orchestrator_factory, simulated_sender, content_dir):
        orchestrator = orchestrator_factory(IntentCategory.POST_MESSAGE)

        result = await orchestrator.handle("Send a message about the solstice")

        assert [task.kind for task in result.tasks] == [TaskKind.MESSAGE_DELIVERY]
        assert result.tasks[0].status == TaskStatus.COMPLETED
        assert result.tasks[0].detail == "Solstice flow at sunset! Reply YES to join"
        assert simulated_sender.sent == ["Solstice flow at sunset! Reply YES to join"]
        assert result.metadata["whatsappSimulated"] is True
        assert not content_dir.exists()

    @pytest.mark.asyncio
    async def test_create_blog_runs_only_document_pipeline(self, orchestrator_factory, simulated_sender, content_dir):
        orchestrator = orchestrator_factory(IntentCategory.CREATE_BLOG)

        result = await orchestrator.handle("Write about the solstice")

        assert [task.kind for task in result.tasks] == [TaskKind.DOCUMENT_CREATION]
        filename = result.tasks[0].detail
        assert filename.endswith("-summer-solstice-flow.md")
        assert (content_dir / filename).read_text(encoding="utf-8") == BLOG
        assert result.metadata["markdownFile"] == filename
        assert simulated_sender.sent == []

    @pytest.mark.asyncio
    async def test_workflow_runs_both_pipelines(self, orchestrator_factory, simulated_sender, content_dir):
        orchestrator = orchestrator_factory(IntentCategory.WORKFLOW)

        result = await orchestrator.handle("Create everything for the solstice")

        assert [task.kind for task in result.tasks] == [TaskKind.MESSAGE_DELIVERY, TaskKind.DOCUMENT_CREATION]
        assert result.completed_count == 2
        assert "Complete workflow completed" in result.summary_text
        assert len(simulated_sender.sent) == 1
        assert len(list(content_dir.glob("*.md"))) == 1

    @pytest.mark.asyncio
    async def test_workflow_pipelines_overlap(self, orchestrator_factory):
        events = []

        async def generate_message(description):
            events.append("msg-start")
            await asyncio.sleep(0.01)
            events.append("msg-end")
            return "Solstice flow at sunset!"

        async def generate_blog_post(description):
            events.append("blog-start")
            await asyncio.sleep(0.01)
            events.append("blog-end")
            return BLOG

        generator = _generator()
        generator.generate_message.side_effect = generate_message
        generator.generate_blog_post.side_effect = generate_blog_post
        orchestrator = orchestrator_factory(IntentCategory.WORKFLOW, generator=generator)

        result = await orchestrator.handle("Create everything for the solstice")

        assert result.completed_count == 2
        # Both pipelines start before either finishes
        assert events.index("blog-start") < events.index("msg-end")
        assert events.index("msg-start") < events.index("blog-end")

    @pytest.mark.asyncio
    async def test_confidence_recorded_in_metadata(self, orchestrator_factory):
        orchestrator = orchestrator_factory(
            IntentCategory.CHAT,
            classifier=_classifier(IntentCategory.CHAT, confidence=0.42),
        )

        result = await orchestrator.handle("hi")

        assert result.metadata["confidence"] == 0.42


# =============================================================================
# Failure isolation
# =============================================================================

class TestFailureIsolation:

    @pytest.mark.asyncio
    async def test_workflow_blog_failure_keeps_message(self, orchestrator_factory, simulated_sender):
        orchestrator = orchestrator_factory(
            IntentCategory.WORKFLOW,
            generator=_generator(blog=RuntimeError("model overloaded")),
        )

        result = await orchestrator.handle("Create everything for the solstice")

        message_task, blog_task = result.tasks
        assert message_task.status == TaskStatus.COMPLETED
        assert blog_task.status == TaskStatus.FAILED
        assert "model overloaded" in blog_task.detail
        assert result.is_partial
        assert "partial" in result.summary_text.lower()
        assert len(simulated_sender.sent) == 1

    @pytest.mark.asyncio
    async def test_workflow_delivery_failure_keeps_document(self, orchestrator_factory, mock_sender, content_dir):
        mock_sender.send.side_effect = DeliveryError("Twilio returned HTTP 401")
        orchestrator = orchestrator_factory(IntentCategory.WORKFLOW, message_sender=mock_sender)

        result = await orchestrator.handle("Create everything")

        message_task, blog_task = result.tasks
        assert message_task.status == TaskStatus.FAILED
        assert message_task.detail.startswith("Failed to send WhatsApp message")
        assert "401" in message_task.detail
        assert blog_task.status == TaskStatus.COMPLETED
        assert (content_dir / blog_task.detail).exists()
        assert "whatsappMessage" not in result.metadata

    @pytest.mark.asyncio
    async def test_workflow_all_failed(self, orchestrator_factory):
        orchestrator = orchestrator_factory(
            IntentCategory.WORKFLOW,
            generator=_generator(message=RuntimeError("a"), blog=RuntimeError("b")),
        )

        result = await orchestrator.handle("Create everything")

        assert result.completed_count == 0
        assert all(task.detail for task in result.tasks)
        assert "could not be completed" in result.summary_text

    @pytest.mark.asyncio
    async def test_persistence_failure_is_a_failed_task(self, orchestrator_factory):
        store = AsyncMock()
        store.save.side_effect = PersistenceError("disk full")
        orchestrator = orchestrator_factory(IntentCategory.CREATE_BLOG, document_store=store)

        result = await orchestrator.handle("Write about the solstice")

        assert result.tasks[0].status == TaskStatus.FAILED
        assert "disk full" in result.tasks[0].detail

    @pytest.mark.asyncio
    async def test_failed_message_task_has_error_detail(self, orchestrator_factory):
        orchestrator = orchestrator_factory(
            IntentCategory.POST_MESSAGE,
            generator=_generator(message=RuntimeError("")),
        )

        result = await orchestrator.handle("Send a message")

        assert result.tasks[0].status == TaskStatus.FAILED
        assert result.tasks[0].detail
        assert result.tasks[0].detail.startswith("Failed to generate WhatsApp message")

    @pytest.mark.asyncio
    async def test_handle_never_raises(self, orchestrator_factory):
        classifier = AsyncMock()
        classifier.classify.side_effect = RuntimeError("classifier exploded")
        orchestrator = orchestrator_factory(IntentCategory.CHAT, classifier=classifier)

        result = await orchestrator.handle("hi")

        assert result.tasks == []
        assert result.summary_text.startswith("I'm sorry, I encountered an error processing your request")
        assert "classifier exploded" in result.summary_text

    @pytest.mark.asyncio
    async def test_chat_generation_failure_is_apology(self, orchestrator_factory):
        orchestrator = orchestrator_factory(
            IntentCategory.CHAT,
            generator=_generator(chat=RuntimeError("no providers left")),
        )

        result = await orchestrator.handle("hello")

        assert "no providers left" in result.summary_text
        assert result.tasks == []


# =============================================================================
# End to end with the real classifier and generator
# =============================================================================

class TestEndToEnd:

    @pytest.mark.asyncio
    async def test_failover_during_workflow(self, make_selector, simulated_sender, post_store):
        intent_json = '{"intent": "workflow", "confidence": 0.95, "rationale": "both channels"}'
        selector, openai, pplx = make_selector(
            openai=[RuntimeError("openai quota exceeded")],
            perplexity=[intent_json, "Join our full moon flow!", BLOG],
        )
        orchestrator = WorkflowOrchestrator(
            providers=selector,
            message_sender=simulated_sender,
            document_store=post_store,
        )

        result = await orchestrator.handle("Create everything for the full moon flow")

        assert result.metadata["intent"] == "workflow"
        assert result.completed_count == 2
        assert openai.calls == 1
        assert orchestrator.get_provider_status().current_provider == ProviderId.PERPLEXITY

    @pytest.mark.asyncio
    async def test_unparsable_intent_uses_keywords(self, make_selector, simulated_sender, post_store):
        selector, _, _ = make_selector(openai=["not json at all", "Sunday brunch flow! Book now"])
        orchestrator = WorkflowOrchestrator(
            providers=selector,
            message_sender=simulated_sender,
            document_store=post_store,
        )

        result = await orchestrator.handle("Send a message about Sunday brunch flow")

        assert result.metadata["intent"] == "post_message"
        assert simulated_sender.sent == ["Sunday brunch flow! Book now"]


# =============================================================================
# Provider control
# =============================================================================

class TestProviderControl:

    def test_switch_provider_updates_status(self, orchestrator_factory):
        orchestrator = orchestrator_factory(IntentCategory.CHAT)

        orchestrator.switch_provider("perplexity")

        assert orchestrator.get_provider_status().current_provider == ProviderId.PERPLEXITY

    def test_switch_provider_errors_propagate(self, orchestrator_factory, make_selector):
        selector, _, _ = make_selector(credentials={"openai": "sk-1"})
        orchestrator = orchestrator_factory(IntentCategory.CHAT, providers=selector)

        with pytest.raises(InvalidProvider):
            orchestrator.switch_provider("bard")
        with pytest.raises(ProviderUnavailable):
            orchestrator.switch_provider("perplexity")


# =============================================================================
# Reference scenarios
# =============================================================================

class TestScenarios:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "category, expected_tasks",
        [
            (IntentCategory.CHAT, 0),
            (IntentCategory.POST_MESSAGE, 1),
            (IntentCategory.CREATE_BLOG, 1),
            (IntentCategory.WORKFLOW, 2),
        ],
    )
    async def test_task_count_per_intent(self, orchestrator_factory, category, expected_tasks):
        orchestrator = orchestrator_factory(category)

        result = await orchestrator.handle("anything")

        assert len(result.tasks) == expected_tasks

    @pytest.mark.asyncio
    async def test_whatsapp_message_end_to_end(self, make_selector, mock_sender, post_store):
        selector, openai, _ = make_selector(openai=["Saturday yoga at 9am! Reply to save your mat"])
        orchestrator = WorkflowOrchestrator(
            providers=selector,
            message_sender=mock_sender,
            document_store=post_store,
            classifier=_classifier(IntentCategory.POST_MESSAGE),
        )

        result = await orchestrator.handle("Send a WhatsApp message about Saturday's yoga class")

        assert openai.calls == 1
        mock_sender.send.assert_awaited_once_with("Saturday yoga at 9am! Reply to save your mat")
        assert len(result.tasks) == 1
        assert result.tasks[0].status == TaskStatus.COMPLETED
        assert result.metadata["whatsappMessage"] == "Saturday yoga at 9am! Reply to save your mat"
        assert result.metadata["whatsappMessageId"] == "SM123"

    @pytest.mark.asyncio
    async def test_workflow_with_failing_persistence(self, orchestrator_factory):
        store = AsyncMock()
        store.save.side_effect = PersistenceError("permission denied")
        orchestrator = orchestrator_factory(IntentCategory.WORKFLOW, document_store=store)

        result = await orchestrator.handle("Create everything for our summer festival")

        assert [task.status for task in result.tasks] == [TaskStatus.COMPLETED, TaskStatus.FAILED]
        assert result.tasks[1].detail
        assert "partial" in result.summary_text.lower()

    def test_status_is_idempotent(self, orchestrator_factory):
        orchestrator = orchestrator_factory(IntentCategory.CHAT)

        assert orchestrator.get_provider_status() == orchestrator.get_provider_status()
