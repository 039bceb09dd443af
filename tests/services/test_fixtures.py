from datetime import datetime, timezone

import pytest

from starz.services.fixtures import generate_sample_leads

NOW = datetime(2025, 3, 4, 19, 0, tzinfo=timezone.utc)


def test_same_seed_same_leads():
    assert generate_sample_leads(10, now=NOW, seed=3) == generate_sample_leads(10, now=NOW, seed=3)


def test_different_seeds_differ():
    assert generate_sample_leads(10, now=NOW, seed=1) != generate_sample_leads(10, now=NOW, seed=2)


def test_leads_are_numbered_and_in_the_past():
    leads = generate_sample_leads(25, now=NOW)

    assert [lead.id for lead in leads] == list(range(1, 26))
    assert all(lead.created_at <= NOW for lead in leads)
    assert all(lead.last_contacted_at is None or lead.last_contacted_at <= NOW for lead in leads)


def test_zero_count():
    assert generate_sample_leads(0, now=NOW) == []


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        generate_sample_leads(-1, now=NOW)
