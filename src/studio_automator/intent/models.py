"""Data models for intent classification."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..constants import IntentCategory


class IntentResult(BaseModel):
    """Classified intent of one request."""

    category: IntentCategory
    confidence: float = Field(ge=0.0, le=1.0)
    rationale: str = ""

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value: Any) -> float:
        return min(1.0, max(0.0, float(value)))
