from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from starz.models.lead import CoachingContext, CurrentAction, LeadRecord
from starz.services.coaching.errors import InvalidInputError
from starz.services.coaching.signals import (
    BudgetTier,
    Industry,
    SourceReputation,
    budget_tier,
    extract_facts,
    infer_industry,
    is_business_hours,
)

NEW_YORK = ZoneInfo("America/New_York")


@pytest.mark.parametrize(
    ("company", "notes", "expected"),
    [
        ("Joe's HVAC Repair", "", Industry.HVAC),
        ("Main Street Cafe", None, Industry.RESTAURANT),
        (None, "Needs a new plumber website", Industry.PLUMBING),
        ("Bright Electrician Co", "", Industry.ELECTRICAL),
        ("Smile Dental", "", Industry.HEALTHCARE),
        ("Rivera & Sons", "personal injury attorney", Industry.LEGAL),
        ("Acme Widgets", "", Industry.GENERAL),
        (None, None, Industry.GENERAL),
    ],
)
def test_infer_industry(company, notes, expected):
    assert infer_industry(company, notes) is expected


def test_infer_industry_first_match_wins():
    assert infer_industry("Downtown Diner", "restaurant needs hvac work") is Industry.RESTAURANT
    assert infer_industry("Cooling Pros", "also does plumbing") is Industry.HVAC


def test_infer_industry_is_case_insensitive():
    assert infer_industry("ACME PLUMBING", None) is Industry.PLUMBING


@pytest.mark.parametrize(
    ("budget", "expected"),
    [
        (None, BudgetTier.NONE),
        (0, BudgetTier.NONE),
        (-100, BudgetTier.NONE),
        (2_500, BudgetTier.NONE),
        (5_000, BudgetTier.NONE),
        (5_000.01, BudgetTier.STANDARD),
        (9_999, BudgetTier.STANDARD),
        (10_000, BudgetTier.HIGH),
        (50_000, BudgetTier.HIGH),
    ],
)
def test_budget_tier_table(budget, expected):
    assert budget_tier(budget) is expected


@pytest.mark.parametrize(
    ("local", "expected"),
    [
        (datetime(2025, 3, 3, 9, 0), True),  # Monday opening
        (datetime(2025, 3, 3, 8, 59), False),
        (datetime(2025, 3, 7, 17, 59), True),  # Friday last minute
        (datetime(2025, 3, 7, 18, 0), False),
        (datetime(2025, 3, 8, 12, 0), False),  # Saturday
        (datetime(2025, 3, 9, 12, 0), False),  # Sunday
    ],
)
def test_business_hours_window(local, expected):
    assert is_business_hours(local.replace(tzinfo=NEW_YORK)) is expected


def test_business_hours_converts_from_utc():
    # 19:00 UTC is 14:00 in New York before daylight saving starts.
    assert is_business_hours(datetime(2025, 3, 4, 19, 0, tzinfo=timezone.utc)) is True
    # 02:00 UTC Wednesday is still Tuesday evening in New York.
    assert is_business_hours(datetime(2025, 3, 5, 2, 0, tzinfo=timezone.utc)) is False


def test_extract_facts_for_fresh_bark_lead(business_hours_now):
    lead = LeadRecord(
        company="Joe's HVAC Repair",
        notes="",
        created_at=business_hours_now - timedelta(hours=2),
        budget=12_000,
        lead_source="Bark",
    )

    facts = extract_facts(
        lead,
        business_hours_now,
        context=CoachingContext(current_action=CurrentAction.CALLING),
    )

    assert facts.industry is Industry.HVAC
    assert facts.lead_age_hours == pytest.approx(2.0)
    assert facts.lead_age_known is True
    assert facts.budget_tier is BudgetTier.HIGH
    assert facts.is_business_hours is True
    assert facts.lead_source == "bark"
    assert facts.source_reputation is SourceReputation.HIGH_INTENT
    assert facts.current_action is CurrentAction.CALLING
    assert facts.local_time.hour == 14


def test_extract_facts_defaults_for_empty_lead(business_hours_now):
    facts = extract_facts(LeadRecord(), business_hours_now)

    assert facts.industry is Industry.GENERAL
    assert facts.lead_age_hours == 0
    assert facts.lead_age_known is False
    assert facts.budget_tier is BudgetTier.NONE
    assert facts.lead_source is None
    assert facts.source_reputation is SourceReputation.UNKNOWN
    assert facts.current_action is None


def test_future_created_at_clamps_age_to_zero(business_hours_now):
    lead = LeadRecord(created_at=business_hours_now + timedelta(hours=5))

    facts = extract_facts(lead, business_hours_now)

    assert facts.lead_age_hours == 0
    assert facts.lead_age_known is True


def test_naive_now_is_treated_as_utc():
    lead = LeadRecord(created_at=datetime(2025, 3, 4, 12, 0, tzinfo=timezone.utc))

    facts = extract_facts(lead, datetime(2025, 3, 4, 18, 0))

    assert facts.lead_age_hours == pytest.approx(6.0)


def test_non_datetime_now_raises_invalid_input():
    with pytest.raises(InvalidInputError) as excinfo:
        extract_facts(LeadRecord(), "2025-03-04T14:00:00")  # type: ignore[arg-type]

    assert excinfo.value.code == "422_INVALID_CLOCK"


def test_unknown_source_has_unknown_reputation(business_hours_now):
    facts = extract_facts(LeadRecord(lead_source="yellowpages"), business_hours_now)

    assert facts.source_reputation is SourceReputation.UNKNOWN
