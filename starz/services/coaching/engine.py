"""Extract → evaluate → rank pipeline plus the service wrapper used by the API."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ValidationError

from starz.config import settings
from starz.models.lead import CoachingContext, CurrentAction, LeadRecord
from starz.models.recommendation import RecommendationCandidate
from starz.observability.metrics import MetricsReporter, metrics
from starz.services.coaching.availability import AvailabilityStatus, availability_status
from starz.services.coaching.errors import InvalidInputError
from starz.services.coaching.narrative import CoachingBrief, CoachingNarrator
from starz.services.coaching.ranking import DEFAULT_CONFIDENCE_THRESHOLD, rank
from starz.services.coaching.rules import evaluate
from starz.services.coaching.signals import (
    BudgetTier,
    FactSet,
    Industry,
    SignalConfig,
    SourceReputation,
    extract_facts,
    signal_config_from_settings,
)

logger = logging.getLogger(__name__)


def coerce_lead(lead: LeadRecord | Mapping[str, Any]) -> LeadRecord:
    """Validate raw lead payloads at the boundary."""
    if isinstance(lead, LeadRecord):
        return lead
    if not isinstance(lead, Mapping):
        raise InvalidInputError(f"Lead must be a mapping, got {type(lead).__name__}.")
    try:
        return LeadRecord.model_validate(dict(lead))
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
        raise InvalidInputError(f"Lead record has invalid fields: {', '.join(fields)}") from exc


def coerce_context(context: CoachingContext | Mapping[str, Any] | None) -> CoachingContext:
    if context is None:
        return CoachingContext()
    if isinstance(context, CoachingContext):
        return context
    try:
        return CoachingContext.model_validate(dict(context))
    except (TypeError, ValueError) as exc:
        raise InvalidInputError("Coaching context is invalid.", code="422_INVALID_CONTEXT") from exc


def generate_recommendations(
    lead: LeadRecord | Mapping[str, Any],
    context: CoachingContext | Mapping[str, Any] | None,
    now: datetime,
    *,
    config: SignalConfig | None = None,
    threshold: int = DEFAULT_CONFIDENCE_THRESHOLD,
) -> list[RecommendationCandidate]:
    """Return the ranked coaching recommendations for ``lead`` at ``now``."""
    facts = extract_facts(coerce_lead(lead), now, context=coerce_context(context), config=config)
    return rank(evaluate(facts), threshold=threshold)


class FactSummary(BaseModel):
    """Serializable view of the facts a report was built from."""

    industry: Industry
    lead_age_hours: float
    budget_tier: BudgetTier
    is_business_hours: bool
    source_reputation: SourceReputation
    current_action: CurrentAction | None = None

    @classmethod
    def from_facts(cls, facts: FactSet) -> FactSummary:
        return cls(
            industry=facts.industry,
            lead_age_hours=round(facts.lead_age_hours, 2),
            budget_tier=facts.budget_tier,
            is_business_hours=facts.is_business_hours,
            source_reputation=facts.source_reputation,
            current_action=facts.current_action,
        )


class CoachingReport(BaseModel):
    recommendations: list[RecommendationCandidate]
    facts: FactSummary
    availability: AvailabilityStatus
    brief: CoachingBrief | None = None


class CoachingEngine:
    """Runs the coaching pipeline with service configuration, logging and metrics."""

    def __init__(
        self,
        *,
        config: SignalConfig | None = None,
        threshold: int | None = None,
        narrator: CoachingNarrator | None = None,
        metrics_reporter: MetricsReporter | None = None,
    ) -> None:
        self._config = config or signal_config_from_settings(settings)
        self._threshold = settings.coaching_confidence_threshold if threshold is None else threshold
        self._narrator = narrator
        self._metrics = metrics_reporter or metrics

    @property
    def config(self) -> SignalConfig:
        return self._config

    def recommend(
        self,
        lead: LeadRecord | Mapping[str, Any],
        context: CoachingContext | Mapping[str, Any] | None,
        now: datetime,
        *,
        with_brief: bool = False,
    ) -> CoachingReport:
        record = coerce_lead(lead)
        coaching_context = coerce_context(context)
        start = time.perf_counter()
        tags = {"action": coaching_context.current_action.value if coaching_context.current_action else "none"}
        try:
            facts = extract_facts(record, now, context=coaching_context, config=self._config)
            candidates = evaluate(facts)
            ranked = rank(candidates, threshold=self._threshold)
            brief = self._narrator_or_default().brief(record, ranked) if with_brief else None
        except InvalidInputError as exc:
            self._metrics.increment("coaching.errors", tags={**tags, "code": exc.code})
            raise
        finally:
            self._metrics.timing("coaching.latency_ms", (time.perf_counter() - start) * 1000, tags=tags)

        self._metrics.increment("coaching.recommendations", len(ranked), tags=tags)
        logger.info(
            "coaching.generated",
            extra={
                "lead_id": record.id,
                "industry": facts.industry.value,
                "candidates": len(candidates),
                "ranked": len(ranked),
                "business_hours": facts.is_business_hours,
            },
        )
        return CoachingReport(
            recommendations=ranked,
            facts=FactSummary.from_facts(facts),
            availability=availability_status(now, config=self._config),
            brief=brief,
        )

    def _narrator_or_default(self) -> CoachingNarrator:
        if self._narrator is None:
            self._narrator = CoachingNarrator()
        return self._narrator


_ENGINE_INSTANCE: CoachingEngine | None = None


def get_coaching_engine() -> CoachingEngine:
    """Singleton accessor used by API routes."""
    global _ENGINE_INSTANCE  # noqa: PLW0603
    if _ENGINE_INSTANCE is None:
        _ENGINE_INSTANCE = CoachingEngine()
    return _ENGINE_INSTANCE
