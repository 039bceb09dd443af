from dataclasses import replace
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from starz.models.lead import CurrentAction
from starz.services.coaching import rules
from starz.services.coaching.signals import BudgetTier, FactSet, Industry, SourceReputation

BASE_FACTS = FactSet(
    industry=Industry.GENERAL,
    lead_age_hours=48.0,
    lead_age_known=True,
    budget=None,
    budget_tier=BudgetTier.NONE,
    is_business_hours=True,
    local_time=datetime(2025, 3, 4, 14, 0, tzinfo=ZoneInfo("America/New_York")),
    lead_source=None,
    source_reputation=SourceReputation.UNKNOWN,
    current_action=None,
)


def _facts(**overrides) -> FactSet:
    return replace(BASE_FACTS, **overrides)


def test_neutral_facts_fire_nothing():
    assert rules.evaluate(BASE_FACTS) == []


@pytest.mark.parametrize(("age", "fires"), [(0.5, True), (10, True), (24, True), (24.01, False), (100, False)])
def test_new_lead_urgency(age, fires):
    candidate = rules.new_lead_urgency(_facts(lead_age_hours=age))

    assert (candidate is not None) is fires
    if candidate:
        assert candidate.id == "new_lead_urgency"
        assert candidate.priority == "high"
        assert candidate.confidence == 95


def test_new_lead_urgency_requires_known_age():
    assert rules.new_lead_urgency(_facts(lead_age_hours=0, lead_age_known=False)) is None


@pytest.mark.parametrize(("age", "fires"), [(10, False), (72, False), (72.5, True), (100, True)])
def test_stale_lead_recovery(age, fires):
    candidate = rules.stale_lead_recovery(_facts(lead_age_hours=age))

    assert (candidate is not None) is fires
    if candidate:
        assert candidate.id == "stale_lead_recovery"
        assert (candidate.priority, candidate.confidence) == ("high", 85)


def test_new_and_stale_are_mutually_exclusive():
    fresh = {candidate.id for candidate in rules.evaluate(_facts(lead_age_hours=10))}
    stale = {candidate.id for candidate in rules.evaluate(_facts(lead_age_hours=100))}

    assert "new_lead_urgency" in fresh and "stale_lead_recovery" not in fresh
    assert "stale_lead_recovery" in stale and "new_lead_urgency" not in stale


@pytest.mark.parametrize(
    "industry",
    [
        Industry.RESTAURANT,
        Industry.HVAC,
        Industry.PLUMBING,
        Industry.ELECTRICAL,
        Industry.HEALTHCARE,
        Industry.LEGAL,
    ],
)
def test_industry_strategy_per_industry(industry):
    candidate = rules.industry_strategy(_facts(industry=industry))

    assert candidate is not None
    assert candidate.id == f"{industry.value}_coaching"
    assert candidate.priority == "medium"
    assert 88 <= candidate.confidence <= 90
    assert candidate.action_items


def test_industry_strategy_skips_general():
    assert rules.industry_strategy(_facts(industry=Industry.GENERAL)) is None


@pytest.mark.parametrize(
    ("action", "expected_id", "confidence"),
    [
        (CurrentAction.CALLING, "calling_best_practices", 92),
        (CurrentAction.EMAILING, "email_best_practices", 87),
        (CurrentAction.SCHEDULING, "scheduling_best_practices", 89),
    ],
)
def test_action_coaching(action, expected_id, confidence):
    candidate = rules.action_coaching(_facts(current_action=action))

    assert candidate is not None
    assert candidate.id == expected_id
    assert candidate.confidence == confidence
    assert candidate.priority == "medium"


@pytest.mark.parametrize("action", [None, CurrentAction.QUALIFYING, CurrentAction.CLOSING])
def test_action_coaching_without_playbook(action):
    assert rules.action_coaching(_facts(current_action=action)) is None


def test_high_budget_strategy_wording_follows_tier():
    high = rules.high_budget_strategy(_facts(budget=12_000, budget_tier=BudgetTier.HIGH))
    standard = rules.high_budget_strategy(_facts(budget=7_500, budget_tier=BudgetTier.STANDARD))

    assert high is not None and "substantial" in high.message
    assert standard is not None and "good" in standard.message
    assert (high.priority, high.confidence) == ("high", 93)


@pytest.mark.parametrize("budget", [None, 0, 5_000])
def test_high_budget_strategy_skips_small_budgets(budget):
    assert rules.high_budget_strategy(_facts(budget=budget, budget_tier=BudgetTier.NONE)) is None


def test_off_hours_warning_only_when_calling_after_hours():
    assert rules.off_hours_calling_warning(_facts(current_action=CurrentAction.CALLING)) is None
    assert rules.off_hours_calling_warning(_facts(current_action=CurrentAction.EMAILING, is_business_hours=False)) is None

    candidate = rules.off_hours_calling_warning(_facts(current_action=CurrentAction.CALLING, is_business_hours=False))

    assert candidate is not None
    assert candidate.id == "timing_warning"
    assert (candidate.priority, candidate.confidence) == ("medium", 80)


@pytest.mark.parametrize("source", ["bark", "referral"])
def test_lead_source_strategy_for_high_intent_sources(source):
    candidate = rules.lead_source_strategy(
        _facts(lead_source=source, source_reputation=SourceReputation.HIGH_INTENT)
    )

    assert candidate is not None
    assert candidate.id == f"{source}_lead_coaching"
    assert (candidate.priority, candidate.confidence) == ("high", 94)


def test_lead_source_strategy_ignores_other_sources():
    assert rules.lead_source_strategy(
        _facts(lead_source="google_maps", source_reputation=SourceReputation.LOCAL_INTENT)
    ) is None
    assert rules.lead_source_strategy(
        _facts(lead_source="yelp", source_reputation=SourceReputation.HIGH_INTENT)
    ) is None


def test_evaluate_preserves_catalog_order():
    facts = _facts(
        industry=Industry.HVAC,
        lead_age_hours=2,
        budget=12_000,
        budget_tier=BudgetTier.HIGH,
        is_business_hours=False,
        lead_source="bark",
        source_reputation=SourceReputation.HIGH_INTENT,
        current_action=CurrentAction.CALLING,
    )

    assert [candidate.id for candidate in rules.evaluate(facts)] == [
        "new_lead_urgency",
        "hvac_coaching",
        "calling_best_practices",
        "high_value_approach",
        "timing_warning",
        "bark_lead_coaching",
    ]


def test_rules_are_deterministic():
    facts = _facts(industry=Industry.LEGAL, current_action=CurrentAction.EMAILING)

    assert rules.evaluate(facts) == rules.evaluate(facts)
