"""API endpoints for weighted lead scoring."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from starz.core.clock import Clock, get_clock
from starz.models.lead import LeadRecord
from starz.models.lead_score import LeadScore
from starz.services.scoring.lead_scoring import score_lead, sort_leads_by_priority

router = APIRouter()


class ScoreLeadRequest(LeadRecord):
    """Request payload for scoring a single lead."""

    now: datetime | None = Field(
        default=None,
        description="Evaluation time; defaults to the server clock.",
    )


class PrioritizeRequest(BaseModel):
    leads: list[LeadRecord]
    now: datetime | None = None


class PrioritizedLead(BaseModel):
    lead: LeadRecord
    score: LeadScore


@router.post("/leads/score", response_model=LeadScore)
async def create_lead_score(
    payload: ScoreLeadRequest,
    clock: Clock = Depends(get_clock),
) -> LeadScore:
    """Score one lead."""
    lead = LeadRecord(**payload.model_dump(exclude={"now"}))
    return score_lead(lead, payload.now or clock())


@router.post("/leads/prioritize", response_model=list[PrioritizedLead])
async def prioritize_leads(
    payload: PrioritizeRequest,
    clock: Clock = Depends(get_clock),
) -> list[PrioritizedLead]:
    """Return the leads ordered by score, highest first."""
    ranked = sort_leads_by_priority(payload.leads, payload.now or clock())
    return [PrioritizedLead(lead=lead, score=score) for lead, score in ranked]
