"""Seeded sample-lead generator for demos, dashboards and tests."""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Final

from starz.models.lead import LeadRecord
from starz.services.coaching.signals import ensure_aware

_FIRST_NAMES: Final = ("Joe", "Maria", "Dev", "Priya", "Sam", "Alex", "Chen", "Fatima")
_LAST_NAMES: Final = ("Rivera", "Nguyen", "Smith", "Patel", "Okafor", "Kim", "Garcia")
_BUSINESSES: Final = (
    ("{last}'s HVAC Repair", "Needs more AC tune-up calls before summer"),
    ("{last} Family Restaurant", "Wants more online orders and dining reservations"),
    ("{last} Plumbing Co", "Emergency plumber, misses after-hours calls"),
    ("{last} Electrical Services", "Licensed electrician looking for panel upgrade jobs"),
    ("{last} Dental Care", "Dental practice wants new patients"),
    ("{last} Law Group", "Personal injury attorney, wants more cases"),
    ("{last} Landscaping", "Seasonal landscaping business"),
)
_SOURCES: Final = ("bark", "referral", "google_maps", "chat_widget", "website", "cold_call", None)
_POSITIONS: Final = ("Owner", "Office Manager", "Director of Marketing", "Receptionist", None)
_TIMELINES: Final = ("immediate", "1_month", "3_months", "6_months", "unknown", None)
_STATUSES: Final = ("new", "contacted", "qualified", "proposal")
_BUDGETS: Final = (None, 0, 2_500, 5_000, 7_500, 12_000, 25_000)


def generate_sample_leads(count: int, *, now: datetime, seed: int = 0) -> list[LeadRecord]:
    """Return ``count`` plausible leads; identical inputs give identical output."""
    if count < 0:
        raise ValueError("count must be non-negative.")
    rng = random.Random(seed)
    current = ensure_aware(now)
    leads: list[LeadRecord] = []
    for index in range(count):
        first = rng.choice(_FIRST_NAMES)
        last = rng.choice(_LAST_NAMES)
        company_template, notes = rng.choice(_BUSINESSES)
        created_at = current - timedelta(hours=rng.randint(0, 240))
        contacted = rng.random() < 0.5
        leads.append(
            LeadRecord(
                id=index + 1,
                name=f"{first} {last}",
                company=company_template.format(last=last),
                notes=notes,
                position=rng.choice(_POSITIONS),
                email=f"{first.lower()}@{last.lower()}.example.com",
                phone=f"555-{rng.randint(100, 999)}-{rng.randint(1000, 9999)}" if rng.random() < 0.8 else None,
                lead_source=rng.choice(_SOURCES),
                lead_status=rng.choice(_STATUSES),
                timeline=rng.choice(_TIMELINES),
                budget=rng.choice(_BUDGETS),
                created_at=created_at,
                last_contacted_at=min(created_at + timedelta(hours=rng.randint(1, 12)), current) if contacted else None,
            )
        )
    return leads
