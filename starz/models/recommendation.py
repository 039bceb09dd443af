"""Coaching recommendation produced by a single rule firing."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, conint

Priority = Literal["high", "medium", "low"]
TipType = Literal["opportunity", "warning", "best_practice", "timing", "strategy"]
TipCategory = Literal["calling", "email", "follow_up", "closing", "qualification", "scheduling"]


class RecommendationCandidate(BaseModel):
    """Scored, not-yet-filtered coaching recommendation."""

    id: str
    tip_type: TipType
    category: TipCategory
    priority: Priority
    confidence: conint(ge=0, le=100)  # type: ignore[valid-type]
    title: str
    message: str
    action_items: list[str] = Field(default_factory=list)
    context_explanation: str = ""

    model_config = {"frozen": True}
