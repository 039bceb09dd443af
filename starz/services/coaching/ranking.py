"""Filter and order coaching candidates for display."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from starz.models.recommendation import Priority, RecommendationCandidate

DEFAULT_CONFIDENCE_THRESHOLD: Final = 75

_PRIORITY_RANKS: Final[dict[str, int]] = {"high": 3, "medium": 2, "low": 1}


def priority_rank(priority: Priority) -> int:
    return _PRIORITY_RANKS[priority]


def rank(
    candidates: Iterable[RecommendationCandidate],
    *,
    threshold: int = DEFAULT_CONFIDENCE_THRESHOLD,
) -> list[RecommendationCandidate]:
    """Drop candidates at or below ``threshold`` and sort by priority.

    ``sorted`` is stable, so candidates sharing a priority keep their catalog
    order. Confidence is not a sort key.
    """
    survivors = [candidate for candidate in candidates if candidate.confidence > threshold]
    return sorted(survivors, key=lambda candidate: -priority_rank(candidate.priority))
