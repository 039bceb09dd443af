"""Explainable lead score returned by the weighted scoring engine."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, conint


class ScoreFactors(BaseModel):
    """Per-factor inputs to the weighted lead score (each 0-100 unless noted)."""

    industry_value: int
    company_size_value: int
    budget_score: int
    timeline_score: int
    engagement_score: int
    source_quality: int
    urgency_multiplier: float = Field(description="Multiplier in [1.0, 1.5].")
    qualification_level: int


class LeadScore(BaseModel):
    ai_score: conint(ge=0, le=100)  # type: ignore[valid-type]
    score_factors: ScoreFactors
    industry_score: int
    urgency_level: Literal["critical", "high", "medium", "low"]
    qualification_score: int
    recommendations: list[str] = Field(default_factory=list)
    priority_level: Literal["urgent", "high", "medium", "low"]
