"""Catalog of coaching rules.

Each rule is a pure function of a :class:`FactSet` that returns exactly one
:class:`RecommendationCandidate` or ``None``. Every rule runs on every
evaluation; the catalog order below is the tie-break used by the ranker.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Final

from starz.models.lead import CurrentAction
from starz.models.recommendation import RecommendationCandidate
from starz.services.coaching.signals import (
    STANDARD_BUDGET_THRESHOLD,
    BudgetTier,
    FactSet,
    Industry,
    SourceReputation,
)

Rule = Callable[[FactSet], RecommendationCandidate | None]

NEW_LEAD_MAX_AGE_HOURS: Final = 24
STALE_LEAD_MIN_AGE_HOURS: Final = 72

_INDUSTRY_PLAYBOOKS: Final[dict[Industry, dict[str, Any]]] = {
    Industry.RESTAURANT: {
        "title": "Restaurant Industry Approach",
        "message": "Restaurants need immediate ROI. Focus on increasing foot traffic and online orders.",
        "action_items": [
            "Highlight Google My Business optimization for local search",
            "Mention food delivery app integration",
            "Show how online reviews drive 30% more customers",
        ],
        "context_explanation": "Restaurant margins are tight - emphasize quick wins",
        "confidence": 90,
    },
    Industry.HVAC: {
        "title": "HVAC Service Strategy",
        "message": "HVAC businesses are seasonal. Focus on emergency services and maintenance contracts.",
        "action_items": [
            "Emphasize 24/7 emergency call tracking",
            "Highlight seasonal campaign automation",
            "Show maintenance reminder systems",
        ],
        "context_explanation": "HVAC peak seasons: Summer (AC) and Winter (heating)",
        "confidence": 88,
    },
    Industry.PLUMBING: {
        "title": "Plumbing Emergency Positioning",
        "message": "Plumbing jobs are urgent and stress-driven. Position as the plumber who answers the phone.",
        "action_items": [
            "Ask how emergency leads are handled after hours",
            "Highlight call tracking for burst-pipe and backup searches",
            "Show review generation after every completed job",
        ],
        "context_explanation": "Plumbing emergencies are high-urgency decisions made in minutes",
        "confidence": 90,
    },
    Industry.ELECTRICAL: {
        "title": "Electrical Contractor Strategy",
        "message": "Electrical work is about safety and licensing. Attract customers who value quality over price.",
        "action_items": [
            "Lead with licensing and code-compliance messaging",
            "Highlight reviews that mention safety and professionalism",
            "Target panel upgrade and EV charger searches",
        ],
        "context_explanation": "Customers choose electricians on trust, not on the lowest quote",
        "confidence": 88,
    },
    Industry.HEALTHCARE: {
        "title": "Healthcare Trust Building",
        "message": "Patients research providers online first. Emphasize reviews and patient experience.",
        "action_items": [
            "Audit the practice's review profile before the call",
            "Highlight online booking and new-patient landing pages",
            "Keep claims compliant - no outcome guarantees",
        ],
        "context_explanation": "Healthcare decisions are based on trust, reviews and credibility",
        "confidence": 89,
    },
    Industry.LEGAL: {
        "title": "Legal Authority Positioning",
        "message": "Law firms win on authority. Position around the case types they want more of.",
        "action_items": [
            "Ask which practice areas they want to grow",
            "Highlight practice-area landing pages and intake tracking",
            "Reference cost-per-case rather than cost-per-click",
        ],
        "context_explanation": "Legal clients seek specialized expertise and proven track records",
        "confidence": 89,
    },
}

_ACTION_PLAYBOOKS: Final[dict[CurrentAction, dict[str, Any]]] = {
    CurrentAction.CALLING: {
        "id": "calling_best_practices",
        "category": "calling",
        "title": "Perfect Cold Call Framework",
        "message": "Use the BANT qualification method: Budget, Authority, Need, Timeline.",
        "action_items": [
            'Open with pattern interrupt: "Did I catch you at a bad time?"',
            'Ask permission: "I have a quick question - are you the person who handles marketing?"',
            "Listen 70%, talk 30% - let them reveal their pain points",
        ],
        "context_explanation": "Average cold call success rate: 2.5%. Perfect your script!",
        "confidence": 92,
    },
    CurrentAction.EMAILING: {
        "id": "email_best_practices",
        "category": "email",
        "title": "High-Converting Email Strategy",
        "message": "Personalization increases response rates by 220%. Make it about them, not you.",
        "action_items": [
            "Subject line: Use their company name or specific pain point",
            "First line: Reference something specific about their business",
            "Include ONE clear call-to-action",
        ],
        "context_explanation": "Best email times: Tuesday-Thursday, 10 AM or 2 PM",
        "confidence": 87,
    },
    CurrentAction.SCHEDULING: {
        "id": "scheduling_best_practices",
        "category": "scheduling",
        "title": "Book the Next Step Now",
        "message": "Lock in a specific time while you have their attention. Offer two options, not an open calendar.",
        "action_items": [
            'Offer two concrete slots: "Does Tuesday at 10 or Wednesday at 2 work better?"',
            "Send the calendar invite before ending the conversation",
            "Confirm who else should attend from their side",
        ],
        "context_explanation": "Meetings booked within the first conversation show up far more often",
        "confidence": 89,
    },
}

_SOURCE_PLAYBOOKS: Final[dict[str, dict[str, Any]]] = {
    "bark": {
        "title": "Bark.com Lead Strategy",
        "message": "This lead is actively seeking services. They're comparing multiple providers.",
        "action_items": [
            "Respond within 15 minutes - speed matters most",
            "Lead with credentials and local presence",
            "Offer free consultation to stand out",
            "Follow up with detailed proposal within 24 hours",
        ],
        "context_explanation": "Bark leads convert 3x higher when contacted first",
    },
    "referral": {
        "title": "Referral Lead Strategy",
        "message": "This lead came pre-sold by someone they trust. Honor the referral and move quickly.",
        "action_items": [
            "Mention the referrer by name in the first sentence",
            "Skip the generic pitch - ask what the referrer told them",
            "Offer a referral-only onboarding bonus",
        ],
        "context_explanation": "Referred leads close at the highest rate of any source",
    },
}


def new_lead_urgency(facts: FactSet) -> RecommendationCandidate | None:
    if not facts.lead_age_known or facts.lead_age_hours > NEW_LEAD_MAX_AGE_HOURS:
        return None
    return RecommendationCandidate(
        id="new_lead_urgency",
        tip_type="opportunity",
        category="calling",
        priority="high",
        confidence=95,
        title="Strike While Hot!",
        message="This is a fresh lead! Statistics show 78% higher conversion when contacted within the first hour.",
        action_items=[
            "Call immediately - don't wait",
            'Use warm opener: "Hi [Name], I see you just inquired about our services"',
            "Be enthusiastic and responsive to their immediate need",
        ],
        context_explanation="New leads are 21x more likely to qualify when contacted within 5 minutes",
    )


def stale_lead_recovery(facts: FactSet) -> RecommendationCandidate | None:
    if facts.lead_age_hours <= STALE_LEAD_MIN_AGE_HOURS:
        return None
    return RecommendationCandidate(
        id="stale_lead_recovery",
        tip_type="warning",
        category="follow_up",
        priority="high",
        confidence=85,
        title="Lead Recovery Strategy",
        message="This lead is getting cold. Use re-engagement tactics to revive interest.",
        action_items=[
            'Acknowledge the delay: "I apologize for not reaching out sooner"',
            "Provide immediate value: share a relevant case study",
            "Create urgency with limited-time offer or bonus",
        ],
        context_explanation="Leads older than 3 days require 60% more effort to convert",
    )


def industry_strategy(facts: FactSet) -> RecommendationCandidate | None:
    playbook = _INDUSTRY_PLAYBOOKS.get(facts.industry)
    if playbook is None:
        return None
    return RecommendationCandidate(
        id=f"{facts.industry.value}_coaching",
        tip_type="strategy",
        category="qualification",
        priority="medium",
        **playbook,
    )


def action_coaching(facts: FactSet) -> RecommendationCandidate | None:
    if facts.current_action is None:
        return None
    playbook = _ACTION_PLAYBOOKS.get(facts.current_action)
    if playbook is None:
        return None
    return RecommendationCandidate(tip_type="best_practice", priority="medium", **playbook)


def high_budget_strategy(facts: FactSet) -> RecommendationCandidate | None:
    if facts.budget_tier is BudgetTier.NONE or not facts.budget or facts.budget <= STANDARD_BUDGET_THRESHOLD:
        return None
    descriptor = "substantial" if facts.budget_tier is BudgetTier.HIGH else "good"
    return RecommendationCandidate(
        id="high_value_approach",
        tip_type="opportunity",
        category="closing",
        priority="high",
        confidence=93,
        title="High-Value Prospect Strategy",
        message=f"This prospect has a {descriptor} budget. Adjust your approach accordingly.",
        action_items=[
            "Focus on ROI and business growth, not price",
            "Offer premium packages first",
            "Request face-to-face or video meeting",
            "Involve decision makers early",
        ],
        context_explanation="High-budget leads convert 40% better with consultative selling",
    )


def off_hours_calling_warning(facts: FactSet) -> RecommendationCandidate | None:
    if facts.current_action is not CurrentAction.CALLING or facts.is_business_hours:
        return None
    return RecommendationCandidate(
        id="timing_warning",
        tip_type="warning",
        category="calling",
        priority="medium",
        confidence=80,
        title="Calling Time Optimization",
        message="You're calling outside optimal hours. Consider adjusting your approach.",
        action_items=[
            "If after hours: Leave voicemail and send follow-up email",
            "If before hours: Schedule call for 10 AM - 4 PM window",
            "Mention you'll call back during business hours",
        ],
        context_explanation="Best calling times: 10 AM - 12 PM and 2 PM - 4 PM",
    )


def lead_source_strategy(facts: FactSet) -> RecommendationCandidate | None:
    if facts.source_reputation is not SourceReputation.HIGH_INTENT or facts.lead_source is None:
        return None
    playbook = _SOURCE_PLAYBOOKS.get(facts.lead_source)
    if playbook is None:
        return None
    return RecommendationCandidate(
        id=f"{facts.lead_source}_lead_coaching",
        tip_type="strategy",
        category="qualification",
        priority="high",
        confidence=94,
        **playbook,
    )


RULES: Final[tuple[Rule, ...]] = (
    new_lead_urgency,
    stale_lead_recovery,
    industry_strategy,
    action_coaching,
    high_budget_strategy,
    off_hours_calling_warning,
    lead_source_strategy,
)


def evaluate(facts: FactSet, rules: tuple[Rule, ...] = RULES) -> list[RecommendationCandidate]:
    """Run every rule against ``facts`` and collect the candidates in catalog order."""
    candidates: list[RecommendationCandidate] = []
    for rule in rules:
        candidate = rule(facts)
        if candidate is not None:
            candidates.append(candidate)
    return candidates
