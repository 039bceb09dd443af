"""Call-script sales tips scored against the lead and what the rep is doing.

Sibling of the coaching rules: instead of firing rules over facts, a fixed
catalog of scripted tips (industry, lead source and universal) is boosted by
how well each tip fits the lead, capped at 100, and the best five are kept.
The result also carries a lead analysis, contextual factors, a recommended
approach and next best actions.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field

from starz.models.lead import CoachingContext, CurrentAction, LeadRecord
from starz.services.coaching.engine import coerce_context, coerce_lead
from starz.services.coaching.signals import (
    DEFAULT_SIGNAL_CONFIG,
    Industry,
    SignalConfig,
    ensure_aware,
    infer_industry,
    normalize_source,
)

logger = logging.getLogger(__name__)

TipCategory = Literal["opener", "qualification", "objection_handling", "closing", "follow_up", "value_proposition"]
Impact = Literal["high", "medium", "low"]

MAX_TIPS: Final = 5
MAX_NEXT_ACTIONS: Final = 6


class SalesTip(BaseModel):
    id: str
    category: TipCategory
    priority: Literal["critical", "high", "medium", "low"]
    title: str
    tip: str
    script: str
    context: str
    triggers: list[str] = Field(default_factory=list)
    industry: Industry | None = None
    lead_source: str | None = None
    confidence: int = Field(ge=0, le=100)
    expected_impact: Impact
    minutes_to_implement: int

    model_config = ConfigDict(frozen=True)


class LeadAnalysis(BaseModel):
    lead_score: int
    urgency_level: Literal["immediate", "high", "medium", "low"]
    industry_insights: list[str]
    pain_points: list[str]
    opportunities: list[str]
    competitive_advantages: list[str]


class ContextualFactors(BaseModel):
    lead_age_hours: float
    source_quality: int
    budget_indicators: list[str]
    decision_maker_signals: list[str]
    timeline_indicators: list[str]


class SalesTipReport(BaseModel):
    tips: list[SalesTip]
    lead_analysis: LeadAnalysis
    contextual_factors: ContextualFactors
    recommended_approach: str
    next_best_actions: list[str]


INDUSTRY_TIPS: Final[dict[Industry, tuple[SalesTip, ...]]] = {
    Industry.RESTAURANT: (
        SalesTip(
            id="restaurant_opener_1",
            category="opener",
            priority="high",
            title="Restaurant ROI Focus Opener",
            tip="Restaurants need immediate ROI. Lead with foot traffic and revenue impact.",
            script=(
                "Hi [Name], I noticed your restaurant [Restaurant Name]. I help restaurants like yours increase "
                "foot traffic by 30-50% through local search optimization. Are you currently getting enough "
                "customers finding you online when they search for [cuisine type] in [location]?"
            ),
            context="Restaurants operate on thin margins and need quick wins",
            triggers=["restaurant", "food", "dining", "cafe", "bar"],
            industry=Industry.RESTAURANT,
            confidence=92,
            expected_impact="high",
            minutes_to_implement=2,
        ),
        SalesTip(
            id="restaurant_value_prop_1",
            category="value_proposition",
            priority="critical",
            title="Restaurant Local Dominance",
            tip="Focus on local search dominance and online review management",
            script=(
                "When someone searches '[cuisine] near me', you want to be the first result they see. We help you "
                "dominate those local searches and manage your online reputation so you get more reservations "
                "and walk-ins every day."
            ),
            context="Local search is critical for restaurant discovery",
            triggers=["local search", "google maps", "reviews"],
            industry=Industry.RESTAURANT,
            confidence=89,
            expected_impact="high",
            minutes_to_implement=3,
        ),
    ),
    Industry.HVAC: (
        SalesTip(
            id="hvac_opener_1",
            category="opener",
            priority="high",
            title="HVAC Emergency Response Opener",
            tip="HVAC businesses thrive on emergency calls. Emphasize 24/7 availability.",
            script=(
                "Hi [Name], I help HVAC companies like [Company Name] capture more emergency service calls and "
                "maintenance contracts. When someone's AC breaks down at 2 AM in the summer, are they finding "
                "your business first on Google?"
            ),
            context="HVAC emergency services are high-value, time-sensitive",
            triggers=["hvac", "heating", "cooling", "air conditioning"],
            industry=Industry.HVAC,
            confidence=91,
            expected_impact="high",
            minutes_to_implement=2,
        ),
        SalesTip(
            id="hvac_seasonal_1",
            category="value_proposition",
            priority="critical",
            title="HVAC Seasonal Marketing Strategy",
            tip="Emphasize seasonal campaigns and preventive maintenance marketing",
            script=(
                "We set up automated seasonal campaigns for HVAC companies. Before summer we market your AC "
                "tune-ups, before winter your heating checks. That creates steady revenue year-round instead of "
                "just emergency calls."
            ),
            context="HVAC demand is highly seasonal, so plan ahead for peak periods",
            triggers=["seasonal", "maintenance", "tune-up"],
            industry=Industry.HVAC,
            confidence=87,
            expected_impact="high",
            minutes_to_implement=4,
        ),
    ),
    Industry.PLUMBING: (
        SalesTip(
            id="plumbing_opener_1",
            category="opener",
            priority="high",
            title="Plumbing Emergency Positioning",
            tip="Position as the reliable emergency plumber who answers calls",
            script=(
                "Hi [Name], when someone has a burst pipe at [time], they need a plumber who actually answers the "
                "phone and shows up. I help plumbing companies like yours be the first result they find and the "
                "first one they call. How are you currently handling emergency leads?"
            ),
            context="Plumbing emergencies are stress-driven decisions with high urgency",
            triggers=["plumbing", "plumber", "emergency", "water damage"],
            industry=Industry.PLUMBING,
            confidence=90,
            expected_impact="high",
            minutes_to_implement=2,
        ),
    ),
    Industry.ELECTRICAL: (
        SalesTip(
            id="electrical_opener_1",
            category="opener",
            priority="high",
            title="Electrical Safety Focus Opener",
            tip="Emphasize safety and code compliance: electrical work is about protection",
            script=(
                "Hi [Name], electrical work is about keeping families and businesses safe. I help electrical "
                "contractors like [Company Name] attract customers who value licensed, quality work over the "
                "cheapest option. Are your leads coming from customers who understand that value?"
            ),
            context="Electrical work involves safety concerns and licensing requirements",
            triggers=["electrical", "electrician", "wiring", "panel"],
            industry=Industry.ELECTRICAL,
            confidence=88,
            expected_impact="high",
            minutes_to_implement=3,
        ),
    ),
    Industry.HEALTHCARE: (
        SalesTip(
            id="healthcare_opener_1",
            category="opener",
            priority="high",
            title="Healthcare Trust Building Opener",
            tip="Healthcare requires trust and credibility: emphasize patient experience",
            script=(
                "Hi [Name], patients research their providers online before booking. I help practices like "
                "[Practice Name] build trust through patient reviews and a professional web presence. How are new "
                "patients currently discovering your practice?"
            ),
            context="Healthcare decisions are based on trust, reviews, and credibility",
            triggers=["medical", "doctor", "dental", "healthcare", "clinic"],
            industry=Industry.HEALTHCARE,
            confidence=85,
            expected_impact="medium",
            minutes_to_implement=3,
        ),
    ),
    Industry.LEGAL: (
        SalesTip(
            id="legal_opener_1",
            category="opener",
            priority="high",
            title="Legal Authority Positioning",
            tip="Legal services require authority and expertise positioning",
            script=(
                "Hi [Name], people who need legal help look for an attorney with expertise in their specific "
                "issue. I help firms like [Firm Name] establish that authority online. What types of cases are you "
                "looking to attract more of?"
            ),
            context="Legal clients seek specialized expertise and proven track records",
            triggers=["legal", "attorney", "lawyer", "law firm"],
            industry=Industry.LEGAL,
            confidence=86,
            expected_impact="medium",
            minutes_to_implement=3,
        ),
    ),
}

SOURCE_TIPS: Final[dict[str, tuple[SalesTip, ...]]] = {
    "bark": (
        SalesTip(
            id="bark_speed_tip",
            category="opener",
            priority="critical",
            title="Bark Lead Speed Response",
            tip="Bark leads are actively shopping, so speed is everything",
            script=(
                "Hi [Name], I just saw your request on Bark for [service type]. You're probably getting multiple "
                "quotes, so let me cut straight to what makes us different: [unique value proposition]. What's "
                "most important to you in choosing a provider?"
            ),
            context="Bark leads are comparison shopping with multiple providers",
            triggers=["bark", "quote request", "multiple providers"],
            lead_source="bark",
            confidence=95,
            expected_impact="high",
            minutes_to_implement=1,
        ),
    ),
    "google_maps": (
        SalesTip(
            id="google_local_tip",
            category="opener",
            priority="high",
            title="Google Maps Local Intent",
            tip="Google Maps leads have local intent: emphasize proximity and availability",
            script=(
                "Hi [Name], I see you found us through Google Maps. We focus on businesses in [local area] and "
                "understand [specific local market insight]. What's driving your interest in [service] right now?"
            ),
            context="Google Maps indicates local search intent and immediacy",
            triggers=["google maps", "local search", "near me"],
            lead_source="google_maps",
            confidence=88,
            expected_impact="high",
            minutes_to_implement=2,
        ),
    ),
    "chat_widget": (
        SalesTip(
            id="chat_engagement_tip",
            category="opener",
            priority="high",
            title="Chat Widget Engagement Response",
            tip="Chat widget leads showed initiative: acknowledge their proactive approach",
            script=(
                "Hi [Name], thanks for reaching out through our website chat. Based on what you shared about "
                "[specific need mentioned], I think we can definitely help. What timeline are you working with?"
            ),
            context="Chat widget suggests active engagement and immediate interest",
            triggers=["chat widget", "website inquiry", "direct contact"],
            lead_source="chat_widget",
            confidence=87,
            expected_impact="medium",
            minutes_to_implement=2,
        ),
    ),
}

UNIVERSAL_TIPS: Final[tuple[SalesTip, ...]] = (
    SalesTip(
        id="universal_permission_opener",
        category="opener",
        priority="medium",
        title="Permission-Based Opening",
        tip="Always ask for permission to continue the conversation",
        script=(
            "Hi [Name], I know you're busy, so I'll be brief. I have some ideas about how we could help "
            "[Company Name] with [specific need]. Do you have 60 seconds for me to share a quick thought?"
        ),
        context="Asking permission shows respect and increases engagement",
        triggers=["cold call", "interruption", "busy prospect"],
        confidence=82,
        expected_impact="medium",
        minutes_to_implement=1,
    ),
    SalesTip(
        id="universal_social_proof",
        category="value_proposition",
        priority="high",
        title="Local Social Proof",
        tip="Use specific local examples and results",
        script=(
            "We just helped [Similar Business Type] in [Nearby Location] increase their [relevant metric] by "
            "[specific percentage]. They had the same challenge you mentioned. Would you like to hear how we "
            "solved it?"
        ),
        context="Local social proof builds immediate credibility and relevance",
        triggers=["credibility", "proof", "results"],
        confidence=89,
        expected_impact="high",
        minutes_to_implement=2,
    ),
    SalesTip(
        id="universal_time_scarcity",
        category="closing",
        priority="medium",
        title="Respectful Time Scarcity",
        tip="Create urgency without being pushy",
        script=(
            "I'm working with a limited number of businesses this quarter to ensure quality results. My next "
            "availability for a strategy session is [specific time]. Does that work for you?"
        ),
        context="Scarcity motivates action when presented professionally",
        triggers=["closing", "urgency", "availability"],
        confidence=78,
        expected_impact="medium",
        minutes_to_implement=2,
    ),
)

# Points added to the base lead score of 50.
SOURCE_BONUS: Final[dict[str, int]] = {
    "bark": 20,
    "google_maps": 15,
    "chat_widget": 15,
    "referral": 25,
    "manual_entry": 5,
}

SOURCE_QUALITY: Final[dict[str, int]] = {
    "bark": 85,
    "google_maps": 80,
    "referral": 95,
    "chat_widget": 75,
    "manual_entry": 60,
}

# Keyed by the tip's category and the rep's current action.
_ACTION_BOOSTS: Final[dict[tuple[CurrentAction, str], int]] = {
    (CurrentAction.CALLING, "opener"): 10,
    (CurrentAction.EMAILING, "follow_up"): 10,
    (CurrentAction.CLOSING, "closing"): 15,
}

_INDUSTRY_INSIGHTS: Final[dict[Industry, tuple[str, ...]]] = {
    Industry.RESTAURANT: (
        "Restaurants rely heavily on local search and online reviews",
        "Peak hours and seasonal variations affect marketing needs",
        "Food delivery integration is increasingly important",
        "Visual content (photos) drives customer decisions",
    ),
    Industry.HVAC: (
        "Emergency services generate highest revenue per call",
        "Seasonal demand requires year-round marketing strategy",
        "Maintenance contracts provide steady recurring revenue",
        "Service area geography is crucial for efficiency",
    ),
    Industry.PLUMBING: (
        "Emergency calls have highest conversion rates",
        "Water damage creates immediate urgency",
        "Licensed, insured positioning is critical",
        "Local reputation and response time matter most",
    ),
    Industry.ELECTRICAL: (
        "Safety concerns drive quality over price decisions",
        "Code compliance and licensing are key differentiators",
        "Commercial vs residential have different sales cycles",
        "Emergency electrical work commands premium pricing",
    ),
    Industry.HEALTHCARE: (
        "Patient reviews and reputation are paramount",
        "Insurance and payment options affect decisions",
        "Specialized services require targeted marketing",
        "Trust and credibility drive patient acquisition",
    ),
    Industry.LEGAL: (
        "Expertise specialization is crucial for positioning",
        "Case results and experience build authority",
        "Referrals are primary source of quality leads",
        "Initial consultation approach affects conversion",
    ),
    Industry.GENERAL: (
        "Local market presence is important",
        "Quality and reliability are key differentiators",
        "Customer reviews influence decisions",
        "Competitive pricing within quality standards",
    ),
}

_PAIN_POINTS: Final[dict[Industry, tuple[str, ...]]] = {
    Industry.RESTAURANT: ("Low foot traffic", "Poor online visibility", "Negative reviews", "Delivery app competition"),
    Industry.HVAC: (
        "Seasonal revenue fluctuations",
        "Emergency call competition",
        "Customer acquisition costs",
        "Service scheduling",
    ),
    Industry.PLUMBING: (
        "Emergency response competition",
        "Service area coverage",
        "Customer trust issues",
        "Pricing competition",
    ),
    Industry.ELECTRICAL: (
        "Safety liability concerns",
        "Licensed competition",
        "Complex project pricing",
        "Emergency availability",
    ),
    Industry.HEALTHCARE: ("Patient acquisition", "Insurance complexities", "Online reputation", "Appointment scheduling"),
    Industry.LEGAL: (
        "Client acquisition costs",
        "Case type specialization",
        "Marketing restrictions",
        "Consultation conversion",
    ),
    Industry.GENERAL: (
        "Customer acquisition challenges",
        "Online visibility issues",
        "Competitive pricing pressure",
        "Quality service differentiation",
    ),
}

_OPPORTUNITIES: Final[dict[Industry, tuple[str, ...]]] = {
    Industry.RESTAURANT: (
        "Local SEO dominance",
        "Review management",
        "Online ordering integration",
        "Social media presence",
    ),
    Industry.HVAC: (
        "Maintenance contract marketing",
        "Seasonal campaign automation",
        "Emergency service positioning",
        "Energy efficiency trends",
    ),
    Industry.PLUMBING: (
        "Emergency response optimization",
        "Preventive maintenance plans",
        "Water conservation services",
        "Smart home integration",
    ),
    Industry.ELECTRICAL: (
        "Smart home installations",
        "Energy efficiency upgrades",
        "Commercial electrical growth",
        "Safety compliance services",
    ),
    Industry.HEALTHCARE: (
        "Telemedicine integration",
        "Patient education content",
        "Specialized service marketing",
        "Insurance navigation",
    ),
    Industry.LEGAL: (
        "Practice area specialization",
        "Thought leadership content",
        "Referral network expansion",
        "Consultation optimization",
    ),
    Industry.GENERAL: (
        "Digital marketing enhancement",
        "Customer service automation",
        "Local market expansion",
        "Service quality differentiation",
    ),
}

_COMPETITIVE_ADVANTAGES: Final[dict[Industry, tuple[str, ...]]] = {
    Industry.RESTAURANT: (
        "Unique cuisine positioning",
        "Exceptional service experience",
        "Local community connection",
        "Authentic atmosphere",
    ),
    Industry.HVAC: (
        "24/7 emergency availability",
        "Certified technician expertise",
        "Comprehensive service offerings",
        "Maintenance plan value",
    ),
    Industry.PLUMBING: (
        "Rapid emergency response",
        "Licensed and insured reliability",
        "Modern equipment and techniques",
        "Transparent pricing",
    ),
    Industry.ELECTRICAL: (
        "Safety-first approach",
        "Licensed professional expertise",
        "Code compliance guarantee",
        "Modern technology adoption",
    ),
    Industry.HEALTHCARE: (
        "Specialized expertise",
        "Patient-centered care",
        "Advanced treatment options",
        "Comprehensive service approach",
    ),
    Industry.LEGAL: (
        "Practice area specialization",
        "Proven case results",
        "Client communication excellence",
        "Strategic legal approach",
    ),
    Industry.GENERAL: (
        "Quality service delivery",
        "Professional expertise",
        "Customer satisfaction focus",
        "Reliable business practices",
    ),
}

_SOURCE_APPROACHES: Final[dict[str, str]] = {
    "bark": (
        "Speed-focused competitive approach: Respond immediately, differentiate quickly, "
        "provide detailed proposal within 2 hours."
    ),
    "google_maps": (
        "Local-focused consultative approach: Emphasize local expertise, schedule in-person meeting, "
        "build relationship first."
    ),
    "chat_widget": (
        "Engagement-focused approach: Acknowledge their initiative, provide immediate value, "
        "schedule follow-up consultation."
    ),
}
_DEFAULT_APPROACH: Final = (
    "Relationship-focused approach: Build trust first, understand their specific needs, provide customized solution."
)
_INDUSTRY_APPROACHES: Final[dict[Industry, str]] = {
    Industry.RESTAURANT: "Focus on immediate ROI and foot traffic increase.",
    Industry.HVAC: "Emphasize emergency availability and maintenance value.",
    Industry.HEALTHCARE: "Build credibility and trust through expertise demonstration.",
}


def generate_sales_tips(
    lead: LeadRecord | Mapping[str, Any],
    now: datetime,
    *,
    context: CoachingContext | Mapping[str, Any] | None = None,
    config: SignalConfig | None = None,
) -> SalesTipReport:
    """Score the tip catalog for ``lead`` at ``now`` and return the top five with analysis."""
    record = coerce_lead(lead)
    current_action = coerce_context(context).current_action
    current = ensure_aware(now)
    cfg = config or DEFAULT_SIGNAL_CONFIG

    industry = detect_industry(record, config=cfg)
    lead_source = normalize_source(record.lead_source)
    age_hours = lead_age_hours(record, current)

    candidates = [
        *INDUSTRY_TIPS.get(industry, ()),
        *SOURCE_TIPS.get(lead_source or "", ()),
        *UNIVERSAL_TIPS,
    ]
    scored = score_tips_for_context(
        candidates,
        industry=industry,
        lead_source=lead_source,
        current_action=current_action,
        age_hours=age_hours,
    )
    tips = sorted(scored, key=lambda tip: -tip.confidence)[:MAX_TIPS]

    analysis = analyze_lead(record, industry, age_hours)
    factors = analyze_contextual_factors(record, age_hours)
    logger.debug(
        "sales_tips.generated",
        extra={"lead_id": record.id, "industry": industry.value, "tips": [tip.id for tip in tips]},
    )
    return SalesTipReport(
        tips=tips,
        lead_analysis=analysis,
        contextual_factors=factors,
        recommended_approach=recommended_approach(industry, lead_source, age_hours),
        next_best_actions=next_best_actions(record, industry, analysis),
    )


def detect_industry(lead: LeadRecord, *, config: SignalConfig | None = None) -> Industry:
    """Industry from company, notes and position text."""
    notes = " ".join(part for part in (lead.notes, lead.position) if part)
    return infer_industry(lead.company, notes, config=config)


def lead_age_hours(lead: LeadRecord, now: datetime) -> float | None:
    """Hours since the lead was created, clamped at zero; ``None`` when unknown."""
    if lead.created_at is None:
        return None
    return max(0.0, (now - lead.created_at).total_seconds() / 3600)


def score_tips_for_context(
    tips: list[SalesTip],
    *,
    industry: Industry,
    lead_source: str | None,
    current_action: CurrentAction | None,
    age_hours: float | None,
) -> list[SalesTip]:
    scored: list[SalesTip] = []
    for tip in tips:
        confidence = tip.confidence
        if current_action is not None:
            confidence += _ACTION_BOOSTS.get((current_action, tip.category), 0)
        if tip.lead_source is not None and tip.lead_source == lead_source:
            confidence += 15
        if tip.industry is not None and tip.industry is industry:
            confidence += 12
        if age_hours is not None and age_hours <= 1 and tip.priority == "critical":
            confidence += 8
        if tip.expected_impact == "high":
            confidence += 5
        scored.append(tip.model_copy(update={"confidence": min(100, confidence)}))
    return scored


def analyze_lead(lead: LeadRecord, industry: Industry, age_hours: float | None) -> LeadAnalysis:
    score = 50
    budget = lead.budget or 0
    if budget > 10_000:
        score += 25
    elif budget > 5_000:
        score += 15
    elif budget > 1_000:
        score += 10

    if age_hours is not None:
        if age_hours <= 1:
            score += 20
        elif age_hours <= 24:
            score += 15
        elif age_hours <= 72:
            score += 5
        else:
            score -= 10

    score += SOURCE_BONUS.get(normalize_source(lead.lead_source) or "", 0)

    # Urgency uses the uncapped score.
    if score >= 80:
        urgency = "immediate"
    elif score >= 65:
        urgency = "high"
    elif score >= 40:
        urgency = "medium"
    else:
        urgency = "low"

    return LeadAnalysis(
        lead_score=min(100, score),
        urgency_level=urgency,
        industry_insights=list(_INDUSTRY_INSIGHTS[industry]),
        pain_points=list(_PAIN_POINTS[industry]),
        opportunities=list(_OPPORTUNITIES[industry]),
        competitive_advantages=list(_COMPETITIVE_ADVANTAGES[industry]),
    )


def analyze_contextual_factors(lead: LeadRecord, age_hours: float | None) -> ContextualFactors:
    budget = lead.budget or 0
    source = normalize_source(lead.lead_source)

    if budget > 10_000:
        budget_indicators = ["High-value prospect", "Decision maker likely involved"]
    elif budget > 5_000:
        budget_indicators = ["Substantial budget", "Quality-focused buyer"]
    elif budget > 1_000:
        budget_indicators = ["Moderate budget", "Value-conscious decision"]
    else:
        budget_indicators = ["Budget-sensitive", "ROI-focused approach needed"]

    position = (lead.position or "").lower()
    decision_maker_signals = [
        signal
        for title, signal in (
            ("owner", "Business owner - quick decisions"),
            ("manager", "Management level - approval authority"),
            ("director", "Director level - strategic decisions"),
        )
        if title in position
    ]

    notes = (lead.notes or "").lower()
    timeline_indicators: list[str] = []
    if age_hours is not None and age_hours <= 1:
        timeline_indicators.append("Immediate need - hot lead")
    if source == "bark":
        timeline_indicators.append("Active shopping - comparing options")
    if "urgent" in notes:
        timeline_indicators.append("Urgent timeline mentioned")
    if "asap" in notes:
        timeline_indicators.append("ASAP requirement")

    return ContextualFactors(
        lead_age_hours=round(age_hours or 0.0, 2),
        source_quality=SOURCE_QUALITY.get(source or "", 50),
        budget_indicators=budget_indicators,
        decision_maker_signals=decision_maker_signals,
        timeline_indicators=timeline_indicators,
    )


def recommended_approach(industry: Industry, lead_source: str | None, age_hours: float | None) -> str:
    parts = [_SOURCE_APPROACHES.get(lead_source or "", _DEFAULT_APPROACH)]
    if industry in _INDUSTRY_APPROACHES:
        parts.append(_INDUSTRY_APPROACHES[industry])
    if age_hours is not None and age_hours <= 1:
        parts.append("Priority: Strike while hot - this is a fresh lead requiring immediate attention.")
    elif age_hours is not None and age_hours > 72:
        parts.append("Re-engagement strategy: Acknowledge delay, provide new value, create urgency.")
    return " ".join(parts)


def next_best_actions(lead: LeadRecord, industry: Industry, analysis: LeadAnalysis) -> list[str]:
    if analysis.urgency_level == "immediate":
        actions = [
            "Call immediately - within 5 minutes",
            "Send follow-up email with specific proposal",
            "Schedule same-day consultation if possible",
        ]
    elif analysis.urgency_level == "high":
        actions = [
            "Call within 1 hour",
            "Send personalized email with relevant case study",
            "Schedule consultation within 48 hours",
        ]
    else:
        actions = [
            "Call within 4 hours",
            "Send educational content email",
            "Schedule consultation within 1 week",
        ]

    if normalize_source(lead.lead_source) == "bark":
        actions += ["Prepare competitive differentiation talking points", "Have detailed proposal ready to send immediately"]
    if lead.budget and lead.budget > 5_000:
        actions += ["Prepare premium service presentation", "Include ROI calculations and case studies"]
    if industry is Industry.RESTAURANT:
        actions += ["Research their current online presence", "Prepare local competition analysis"]
    elif industry is Industry.HVAC:
        actions += ["Check current season relevance", "Prepare maintenance contract options"]
    return actions[:MAX_NEXT_ACTIONS]
