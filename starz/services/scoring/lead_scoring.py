"""Weighted lead scoring used to prioritize the CRM call queue."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import datetime
from typing import Final

from starz.models.lead import LeadRecord
from starz.models.lead_score import LeadScore, ScoreFactors
from starz.services.coaching.signals import ensure_aware

logger = logging.getLogger(__name__)

# Table order is the keyword search order.
INDUSTRY_SCORES: Final[dict[str, int]] = {
    "healthcare": 95,
    "legal": 90,
    "finance": 88,
    "real_estate": 85,
    "automotive": 82,
    "home_services": 80,
    "restaurant": 75,
    "retail": 70,
    "education": 68,
    "nonprofit": 45,
    "government": 40,
    "other": 50,
}

INDUSTRY_KEYWORDS: Final[dict[str, tuple[str, ...]]] = {
    "healthcare": ("medical", "healthcare", "clinic", "hospital", "dental", "doctor", "physician"),
    "legal": ("law", "legal", "attorney", "lawyer", "firm", "litigation"),
    "finance": ("financial", "bank", "investment", "accounting", "insurance"),
    "real_estate": ("real estate", "property", "realtor", "mortgage"),
    "automotive": ("auto", "car", "vehicle", "dealership", "repair"),
    "home_services": ("plumbing", "hvac", "electrical", "roofing", "cleaning", "landscaping"),
    "restaurant": ("restaurant", "food", "dining", "catering"),
    "retail": ("retail", "store", "shop", "e-commerce"),
    "education": ("school", "education", "university", "training"),
    "nonprofit": ("nonprofit", "charity", "foundation"),
    "government": ("government", "municipal", "city", "state"),
}

COMPANY_SIZE_SCORES: Final[dict[str, int]] = {
    "enterprise": 100,
    "large": 85,
    "medium": 70,
    "small": 55,
    "startup": 40,
}

SOURCE_QUALITY_SCORES: Final[dict[str, int]] = {
    "referral": 95,
    "website": 85,
    "google_ads": 80,
    "linkedin": 75,
    "facebook": 70,
    "chat_widget": 68,
    "yelp": 65,
    "google_maps": 60,
    "cold_call": 45,
    "email": 40,
    "other": 35,
}

TIMELINE_SCORES: Final[dict[str, int]] = {
    "immediate": 100,
    "1_month": 85,
    "3_months": 70,
    "6_months": 55,
    "1_year": 35,
    "unknown": 25,
}

# Budgets are stored in cents: 1_000_000 is $10,000.
BUDGET_BANDS: Final[tuple[tuple[float, int], ...]] = (
    (1_000_000, 100),
    (500_000, 85),
    (300_000, 70),
    (150_000, 55),
    (50_000, 40),
)

LEAD_STATUS_POINTS: Final[dict[str, int]] = {
    "qualified": 25,
    "proposal": 20,
    "negotiation": 15,
    "contacted": 10,
    "new": 5,
}

PIPELINE_STAGE_POINTS: Final[dict[str, int]] = {
    "negotiation": 25,
    "proposal": 20,
    "demo": 15,
    "qualified": 10,
    "prospect": 5,
}

DECISION_MAKER_TITLES: Final = ("owner", "ceo", "manager", "director")

WEIGHTS: Final[dict[str, float]] = {
    "industry_value": 0.20,
    "company_size_value": 0.15,
    "budget_score": 0.20,
    "timeline_score": 0.15,
    "engagement_score": 0.10,
    "source_quality": 0.10,
    "qualification_level": 0.10,
}


def score_lead(lead: LeadRecord, now: datetime) -> LeadScore:
    """Score a single lead as of ``now``."""
    current = ensure_aware(now)
    factors = ScoreFactors(
        industry_value=industry_value(lead.notes),
        company_size_value=COMPANY_SIZE_SCORES.get(lead.company_size or "", 50),
        budget_score=budget_score(lead.budget, lead.deal_value),
        timeline_score=TIMELINE_SCORES.get(lead.timeline or "", 25),
        engagement_score=engagement_score(lead, current),
        source_quality=SOURCE_QUALITY_SCORES.get(lead.lead_source or "", 35),
        urgency_multiplier=urgency_multiplier(lead, current),
        qualification_level=qualification_level(lead),
    )
    base_score = sum(getattr(factors, name) * weight for name, weight in WEIGHTS.items())
    # Halves round up.
    ai_score = min(100, math.floor(base_score * factors.urgency_multiplier + 0.5))

    return LeadScore(
        ai_score=ai_score,
        score_factors=factors,
        industry_score=factors.industry_value,
        urgency_level=urgency_level(ai_score, factors),
        qualification_score=factors.qualification_level,
        recommendations=recommendations(ai_score, factors),
        priority_level=priority_level(ai_score),
    )


def score_leads(leads: Iterable[LeadRecord], now: datetime) -> dict[int, LeadScore]:
    """Batch scoring keyed by lead id; leads without an id are skipped."""
    results: dict[int, LeadScore] = {}
    for lead in leads:
        if lead.id is None:
            logger.debug("scoring.skip_missing_id", extra={"company": lead.company})
            continue
        results[lead.id] = score_lead(lead, now)
    return results


def sort_leads_by_priority(
    leads: Iterable[LeadRecord], now: datetime
) -> list[tuple[LeadRecord, LeadScore]]:
    """Pair every lead with its score, highest score first (stable for ties)."""
    scored = [(lead, score_lead(lead, now)) for lead in leads]
    return sorted(scored, key=lambda pair: -pair[1].ai_score)


def industry_value(notes: str | None) -> int:
    text = (notes or "").lower()
    for industry, score in INDUSTRY_SCORES.items():
        keywords = INDUSTRY_KEYWORDS.get(industry, ())
        if any(keyword in text for keyword in keywords):
            return score
    return INDUSTRY_SCORES["other"]


def budget_score(budget: float | None, deal_value: float | None) -> int:
    value = budget or deal_value or 0
    for floor, score in BUDGET_BANDS:
        if value >= floor:
            return score
    return 25


def engagement_score(lead: LeadRecord, now: datetime) -> int:
    score = 0
    if lead.last_contacted_at:
        days_since_contact = int((now - lead.last_contacted_at).total_seconds() // 86400)
        if days_since_contact <= 1:
            score += 30
        elif days_since_contact <= 3:
            score += 20
        elif days_since_contact <= 7:
            score += 10
    score += LEAD_STATUS_POINTS.get(lead.lead_status or "new", 0)
    score += PIPELINE_STAGE_POINTS.get(lead.pipeline_stage or "prospect", 0)
    return min(100, score)


def urgency_multiplier(lead: LeadRecord, now: datetime) -> float:
    multiplier = 1.0
    if lead.timeline == "immediate":
        multiplier += 0.3
    elif lead.timeline == "1_month":
        multiplier += 0.2
    elif lead.timeline == "3_months":
        multiplier += 0.1

    if lead.last_contacted_at:
        hours_ago = (now - lead.last_contacted_at).total_seconds() / 3600
        if hours_ago <= 24:
            multiplier += 0.2
        elif hours_ago <= 72:
            multiplier += 0.1
    return round(min(1.5, multiplier), 2)


def qualification_level(lead: LeadRecord) -> int:
    """BANT coverage: budget, authority, need/timeline and contactability."""
    score = 0
    if lead.budget and lead.budget > 0:
        score += 25
    if lead.position and any(title in lead.position.lower() for title in DECISION_MAKER_TITLES):
        score += 25
    if lead.timeline and lead.timeline != "unknown":
        score += 25
    if lead.phone and lead.email:
        score += 25
    return score


def urgency_level(ai_score: int, factors: ScoreFactors) -> str:
    if ai_score >= 80 and factors.timeline_score >= 85:
        return "critical"
    if ai_score >= 70 and factors.timeline_score >= 70:
        return "high"
    if ai_score >= 50:
        return "medium"
    return "low"


def priority_level(ai_score: int) -> str:
    if ai_score >= 80:
        return "urgent"
    if ai_score >= 65:
        return "high"
    if ai_score >= 45:
        return "medium"
    return "low"


def recommendations(ai_score: int, factors: ScoreFactors) -> list[str]:
    advice: list[str] = []
    if ai_score >= 80:
        advice += ["High-priority lead - Contact immediately", "High deal potential - Prepare premium service proposals"]
    elif ai_score >= 65:
        advice += ["Priority contact - Reach out within 2 hours", "Prepare detailed service presentation"]
    elif ai_score >= 45:
        advice += ["Schedule follow-up within 24 hours", "Send informational materials"]
    else:
        advice += ["Add to nurture campaign", "Gather more qualification information"]

    if factors.budget_score < 40:
        advice.append("Qualify budget requirements during next contact")
    if factors.timeline_score >= 85:
        advice.append("Urgent timeline - Fast-track proposal process")
    if factors.engagement_score < 30:
        advice.append("Low engagement - Try different contact methods")
    if factors.qualification_level < 50:
        advice.append("Incomplete qualification - Focus on BANT discovery")
    return advice
