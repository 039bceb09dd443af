"""API endpoints for contextual sales coaching."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from starz.core.clock import Clock, get_clock
from starz.models.lead import CoachingContext, LeadRecord
from starz.services.coaching.availability import AvailabilityStatus, availability_status
from starz.services.coaching.engine import CoachingEngine, CoachingReport, get_coaching_engine
from starz.services.coaching.errors import CoachingError
from starz.services.coaching.narrative import CoachingNarrator, get_narrator
from starz.services.coaching.sales_tips import SalesTipReport, generate_sales_tips

router = APIRouter()
logger = logging.getLogger(__name__)


class RecommendationRequest(BaseModel):
    """Lead plus the context it is being worked in."""

    lead: LeadRecord
    context: CoachingContext = Field(default_factory=CoachingContext)
    now: datetime | None = Field(
        default=None,
        description="Evaluation time; defaults to the server clock.",
    )


@router.post("/coaching/recommendations", response_model=CoachingReport)
async def create_recommendations(
    payload: RecommendationRequest,
    engine: CoachingEngine = Depends(get_coaching_engine),
    clock: Clock = Depends(get_clock),
) -> CoachingReport:
    """Rank coaching tips for a lead."""
    try:
        return engine.recommend(payload.lead, payload.context, payload.now or clock())
    except CoachingError as exc:
        logger.error("coaching.api_error", extra={"lead_id": payload.lead.id, "code": exc.code})
        raise HTTPException(status_code=_map_error_code(exc.code), detail=str(exc)) from exc


@router.post("/coaching/brief", response_model=CoachingReport)
async def create_brief(
    payload: RecommendationRequest,
    engine: CoachingEngine = Depends(get_coaching_engine),
    narrator: CoachingNarrator = Depends(get_narrator),
    clock: Clock = Depends(get_clock),
) -> CoachingReport:
    """Rank coaching tips and wrap them in a short coaching brief."""
    now = payload.now or clock()
    try:
        report = engine.recommend(payload.lead, payload.context, now)
        brief = narrator.brief(payload.lead, report.recommendations)
    except CoachingError as exc:
        logger.error("coaching.api_error", extra={"lead_id": payload.lead.id, "code": exc.code})
        raise HTTPException(status_code=_map_error_code(exc.code), detail=str(exc)) from exc
    return report.model_copy(update={"brief": brief})


@router.post("/coaching/sales-tips", response_model=SalesTipReport)
async def create_sales_tips(
    payload: RecommendationRequest,
    engine: CoachingEngine = Depends(get_coaching_engine),
    clock: Clock = Depends(get_clock),
) -> SalesTipReport:
    """Top call-script tips plus lead analysis and next best actions."""
    try:
        return generate_sales_tips(
            payload.lead,
            payload.now or clock(),
            context=payload.context,
            config=engine.config,
        )
    except CoachingError as exc:
        logger.error("coaching.api_error", extra={"lead_id": payload.lead.id, "code": exc.code})
        raise HTTPException(status_code=_map_error_code(exc.code), detail=str(exc)) from exc


@router.get("/coaching/availability", response_model=AvailabilityStatus)
async def get_availability(
    now: datetime | None = Query(None, description="Override the evaluation time (ISO 8601)."),
    engine: CoachingEngine = Depends(get_coaching_engine),
    clock: Clock = Depends(get_clock),
) -> AvailabilityStatus:
    """Online/offline badge and greeting for the chat widget."""
    return availability_status(now or clock(), config=engine.config)


def _map_error_code(code: str) -> int:
    if code.startswith("422_"):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if code == "429_RATE_LIMIT":
        return status.HTTP_429_TOO_MANY_REQUESTS
    if code == "502_OPENAI_UPSTREAM":
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR
