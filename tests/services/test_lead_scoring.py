from datetime import datetime, timedelta, timezone

import pytest

from starz.models.lead import LeadRecord
from starz.services.scoring import lead_scoring

NOW = datetime(2025, 3, 4, 19, 0, tzinfo=timezone.utc)


def _hot_lead(**overrides) -> LeadRecord:
    payload = {
        "id": 1,
        "company": "Smile Dental",
        "notes": "Dental clinic opening a second location",
        "company_size": "medium",
        "budget": 1_200_000,
        "timeline": "immediate",
        "lead_source": "referral",
        "lead_status": "qualified",
        "pipeline_stage": "proposal",
        "last_contacted_at": NOW - timedelta(hours=2),
        "position": "Owner",
        "phone": "555-123-4567",
        "email": "owner@smile.example.com",
    }
    payload.update(overrides)
    return LeadRecord(**payload)


def test_hot_lead_scores_urgent():
    result = lead_scoring.score_lead(_hot_lead(), NOW)

    factors = result.score_factors
    assert factors.industry_value == 95
    assert factors.company_size_value == 70
    assert factors.budget_score == 100
    assert factors.timeline_score == 100
    assert factors.engagement_score == 75
    assert factors.source_quality == 95
    assert factors.qualification_level == 100
    assert factors.urgency_multiplier == pytest.approx(1.5)
    assert result.ai_score == 100
    assert result.urgency_level == "critical"
    assert result.priority_level == "urgent"
    assert result.recommendations == [
        "High-priority lead - Contact immediately",
        "High deal potential - Prepare premium service proposals",
        "Urgent timeline - Fast-track proposal process",
    ]


def test_empty_lead_uses_neutral_defaults():
    result = lead_scoring.score_lead(LeadRecord(), NOW)

    factors = result.score_factors
    assert factors.industry_value == 50
    assert factors.company_size_value == 50
    assert factors.budget_score == 25
    assert factors.timeline_score == 25
    assert factors.engagement_score == 10
    assert factors.source_quality == 35
    assert factors.qualification_level == 0
    assert factors.urgency_multiplier == 1.0
    assert result.ai_score == 31
    assert result.priority_level == "low"
    assert result.urgency_level == "low"
    assert "Add to nurture campaign" in result.recommendations
    assert "Incomplete qualification - Focus on BANT discovery" in result.recommendations


@pytest.mark.parametrize(
    ("notes", "expected"),
    [
        ("Family law attorney", 90),
        ("Independent insurance agency", 88),
        ("Roofing and gutters", 80),
        ("Catering company", 75),
        ("Dental clinic run by a law firm", 95),
        ("", 50),
    ],
)
def test_industry_value_follows_table_order(notes, expected):
    assert lead_scoring.industry_value(notes) == expected


@pytest.mark.parametrize(
    ("budget", "deal_value", "expected"),
    [
        (1_000_000, None, 100),
        (500_000, None, 85),
        (300_000, None, 70),
        (150_000, None, 55),
        (50_000, None, 40),
        (49_999, None, 25),
        (None, 600_000, 85),
        (None, None, 25),
    ],
)
def test_budget_score_bands(budget, deal_value, expected):
    assert lead_scoring.budget_score(budget, deal_value) == expected


@pytest.mark.parametrize(("days_ago", "points"), [(0.5, 30), (2, 20), (5, 10), (10, 0)])
def test_engagement_recency(days_ago, points):
    lead = LeadRecord(last_contacted_at=NOW - timedelta(days=days_ago))

    # "new" status and "prospect" stage contribute 5 each.
    assert lead_scoring.engagement_score(lead, NOW) == points + 10


def test_urgency_multiplier_is_capped():
    lead = LeadRecord(timeline="immediate", last_contacted_at=NOW - timedelta(hours=1))

    assert lead_scoring.urgency_multiplier(lead, NOW) == 1.5
    assert lead_scoring.urgency_multiplier(LeadRecord(timeline="3_months"), NOW) == pytest.approx(1.1)


def test_qualification_requires_decision_maker_title():
    assert lead_scoring.qualification_level(LeadRecord(position="Receptionist")) == 0
    assert lead_scoring.qualification_level(LeadRecord(position="Marketing Director")) == 25


def test_score_leads_skips_missing_ids():
    results = lead_scoring.score_leads([_hot_lead(id=7), LeadRecord(company="No Id")], NOW)

    assert list(results) == [7]


def test_sort_leads_by_priority_orders_by_score():
    cold = LeadRecord(id=2, company="Cold Co")
    hot = _hot_lead(id=3)

    ranked = lead_scoring.sort_leads_by_priority([cold, hot], NOW)

    assert [lead.id for lead, _ in ranked] == [3, 2]
    assert ranked[0][1].ai_score >= ranked[1][1].ai_score


def test_half_point_scores_round_up():
    lead = LeadRecord(
        company_size="small",
        timeline="6_months",
        lead_source="website",
        lead_status="contacted",
        pipeline_stage="qualified",
    )

    result = lead_scoring.score_lead(lead, NOW)

    assert result.ai_score == 45
    assert result.priority_level == "medium"
