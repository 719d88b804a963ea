"""Data models for workflow results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ..constants import TaskKind, TaskStatus


class TaskOutcome(BaseModel):
    """Recorded result of one pipeline.

    `detail` holds the delivered message text or created filename when the
    task completed, and the error description when it failed.
    """

    kind: TaskKind
    status: TaskStatus
    detail: str

    @classmethod
    def completed(cls, kind: TaskKind, detail: str) -> "TaskOutcome":
        """Create a completed outcome."""
        return cls(kind=kind, status=TaskStatus.COMPLETED, detail=detail)

    @classmethod
    def failed(cls, kind: TaskKind, error: str) -> "TaskOutcome":
        """Create a failed outcome with a non-empty error description."""
        return cls(kind=kind, status=TaskStatus.FAILED, detail=error or "Unknown error")

    @property
    def succeeded(self) -> bool:
        """Whether the pipeline completed."""
        return self.status == TaskStatus.COMPLETED


class WorkflowResult(BaseModel):
    """Terminal artifact of one orchestration run."""

    summary_text: str
    tasks: list[TaskOutcome] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def completed_count(self) -> int:
        """Number of completed tasks."""
        return sum(1 for task in self.tasks if task.succeeded)

    @property
    def failed_count(self) -> int:
        """Number of failed tasks."""
        return len(self.tasks) - self.completed_count

    @property
    def is_partial(self) -> bool:
        """Some tasks completed and some failed."""
        return self.completed_count > 0 and self.failed_count > 0
