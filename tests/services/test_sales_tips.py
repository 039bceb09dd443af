from datetime import timedelta

import pytest

from starz.models.lead import LeadRecord
from starz.services.coaching.errors import InvalidInputError
from starz.services.coaching.sales_tips import (
    INDUSTRY_TIPS,
    SOURCE_TIPS,
    UNIVERSAL_TIPS,
    detect_industry,
    generate_sales_tips,
)
from starz.services.coaching.signals import Industry


def _joes_hvac(now):
    return {
        "company": "Joe's HVAC Repair",
        "createdAt": now - timedelta(hours=2),
        "budget": 12000,
        "leadSource": "bark",
    }


def test_bark_hvac_lead_while_calling(business_hours_now):
    report = generate_sales_tips(_joes_hvac(business_hours_now), business_hours_now, context={"currentAction": "calling"})

    assert [(tip.id, tip.confidence) for tip in report.tips] == [
        ("hvac_opener_1", 100),
        ("hvac_seasonal_1", 100),
        ("bark_speed_tip", 100),
        ("universal_social_proof", 94),
        ("universal_permission_opener", 92),
    ]
    assert report.lead_analysis.lead_score == 100
    assert report.lead_analysis.urgency_level == "immediate"
    assert report.lead_analysis.industry_insights[0] == "Emergency services generate highest revenue per call"
    assert report.contextual_factors.source_quality == 85
    assert report.contextual_factors.budget_indicators == ["High-value prospect", "Decision maker likely involved"]
    assert report.contextual_factors.timeline_indicators == ["Active shopping - comparing options"]
    assert report.recommended_approach.startswith("Speed-focused competitive approach")
    assert report.recommended_approach.endswith("Emphasize emergency availability and maintenance value.")
    assert report.next_best_actions == [
        "Call immediately - within 5 minutes",
        "Send follow-up email with specific proposal",
        "Schedule same-day consultation if possible",
        "Prepare competitive differentiation talking points",
        "Have detailed proposal ready to send immediately",
        "Prepare premium service presentation",
    ]


def test_fresh_lead_boosts_critical_tips(business_hours_now):
    lead = {"company": "Harbor Bistro", "notes": "restaurant", "createdAt": business_hours_now - timedelta(minutes=30)}

    report = generate_sales_tips(lead, business_hours_now)

    assert [(tip.id, tip.confidence) for tip in report.tips] == [
        ("restaurant_opener_1", 100),
        ("restaurant_value_prop_1", 100),
        ("universal_social_proof", 94),
        ("universal_permission_opener", 82),
        ("universal_time_scarcity", 78),
    ]
    assert report.lead_analysis.lead_score == 70
    assert report.lead_analysis.urgency_level == "high"
    assert report.contextual_factors.timeline_indicators == ["Immediate need - hot lead"]
    assert "Strike while hot" in report.recommended_approach
    assert report.next_best_actions[-2:] == [
        "Research their current online presence",
        "Prepare local competition analysis",
    ]


def test_closing_action_boosts_closing_tips(business_hours_now):
    report = generate_sales_tips({"company": "Acme"}, business_hours_now, context={"currentAction": "closing"})

    confidences = {tip.id: tip.confidence for tip in report.tips}
    assert confidences["universal_time_scarcity"] == 93


def test_tips_without_a_source_get_no_source_boost(business_hours_now):
    report = generate_sales_tips({}, business_hours_now)

    confidences = {tip.id: tip.confidence for tip in report.tips}
    assert confidences == {
        "universal_social_proof": 94,
        "universal_permission_opener": 82,
        "universal_time_scarcity": 78,
    }


def test_unknown_lead_age_is_neutral(business_hours_now):
    report = generate_sales_tips({"company": "Acme"}, business_hours_now)

    assert report.lead_analysis.lead_score == 50
    assert report.lead_analysis.urgency_level == "medium"
    assert report.contextual_factors.lead_age_hours == 0.0
    assert report.contextual_factors.budget_indicators == ["Budget-sensitive", "ROI-focused approach needed"]
    assert report.lead_analysis.pain_points[0] == "Customer acquisition challenges"


def test_stale_lead_gets_reengagement(business_hours_now):
    lead = {"company": "Acme", "leadSource": "manual_entry", "createdAt": business_hours_now - timedelta(hours=100)}

    report = generate_sales_tips(lead, business_hours_now)

    assert report.lead_analysis.lead_score == 45
    assert report.contextual_factors.source_quality == 60
    assert report.recommended_approach.endswith("Re-engagement strategy: Acknowledge delay, provide new value, create urgency.")
    assert report.next_best_actions == [
        "Call within 4 hours",
        "Send educational content email",
        "Schedule consultation within 1 week",
    ]


def test_position_feeds_industry_and_decision_maker_signals(business_hours_now):
    lead = LeadRecord(company="Smith & Co", position="Dental office manager and owner", notes="Needs help ASAP")

    report = generate_sales_tips(lead, business_hours_now)

    assert detect_industry(lead) is Industry.HEALTHCARE
    assert report.tips[0].id == "healthcare_opener_1"
    assert report.contextual_factors.decision_maker_signals == [
        "Business owner - quick decisions",
        "Management level - approval authority",
    ]
    assert report.contextual_factors.timeline_indicators == ["ASAP requirement"]


def test_at_most_five_tips_sorted_by_confidence(business_hours_now):
    for action in (None, "calling", "emailing", "closing"):
        report = generate_sales_tips(_joes_hvac(business_hours_now), business_hours_now, context={"currentAction": action})

        confidences = [tip.confidence for tip in report.tips]
        assert len(confidences) <= 5
        assert confidences == sorted(confidences, reverse=True)
        assert all(confidence <= 100 for confidence in confidences)


def test_catalog_is_not_mutated(business_hours_now):
    before = [tip.confidence for tip in (*INDUSTRY_TIPS[Industry.HVAC], *SOURCE_TIPS["bark"], *UNIVERSAL_TIPS)]

    generate_sales_tips(_joes_hvac(business_hours_now), business_hours_now, context={"currentAction": "calling"})

    after = [tip.confidence for tip in (*INDUSTRY_TIPS[Industry.HVAC], *SOURCE_TIPS["bark"], *UNIVERSAL_TIPS)]
    assert before == after


def test_invalid_lead_raises(business_hours_now):
    with pytest.raises(InvalidInputError):
        generate_sales_tips({"createdAt": "whenever"}, business_hours_now)
