"""Derive categorical coaching facts from a loosely-typed lead record."""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from starz.models.lead import CoachingContext, CurrentAction, LeadRecord
from starz.services.coaching.errors import InvalidInputError, SignalConfigError

logger = logging.getLogger(__name__)


class Industry(str, Enum):
    RESTAURANT = "restaurant"
    HVAC = "hvac"
    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    HEALTHCARE = "healthcare"
    LEGAL = "legal"
    GENERAL = "general"


class BudgetTier(str, Enum):
    NONE = "none"
    STANDARD = "standard"
    HIGH = "high"


class SourceReputation(str, Enum):
    HIGH_INTENT = "high_intent"
    LOCAL_INTENT = "local_intent"
    ENGAGED = "engaged"
    UNKNOWN = "unknown"


HIGH_BUDGET_THRESHOLD: Final = 10_000
STANDARD_BUDGET_THRESHOLD: Final = 5_000

_WEEKDAYS: Final[dict[str, int]] = {
    "mon": 0,
    "tue": 1,
    "wed": 2,
    "thu": 3,
    "fri": 4,
    "sat": 5,
    "sun": 6,
}

# Order matters: the first industry whose keywords match wins.
DEFAULT_INDUSTRY_KEYWORDS: Final[tuple[tuple[Industry, tuple[str, ...]], ...]] = (
    (Industry.RESTAURANT, ("restaurant", "food", "cafe", "dining")),
    (Industry.HVAC, ("hvac", "heating", "cooling", "air conditioning")),
    (Industry.PLUMBING, ("plumbing", "plumber")),
    (Industry.ELECTRICAL, ("electrical", "electrician")),
    (Industry.HEALTHCARE, ("dental", "dentist", "medical", "doctor")),
    (Industry.LEGAL, ("law", "legal", "attorney", "lawyer")),
)

DEFAULT_SOURCE_REPUTATIONS: Final[dict[str, SourceReputation]] = {
    "bark": SourceReputation.HIGH_INTENT,
    "referral": SourceReputation.HIGH_INTENT,
    "google_maps": SourceReputation.LOCAL_INTENT,
    "chat_widget": SourceReputation.ENGAGED,
    "website": SourceReputation.ENGAGED,
}


@dataclass(frozen=True)
class SignalConfig:
    """Lookup tables and business-hours window used by the extractor."""

    industry_keywords: tuple[tuple[Industry, tuple[str, ...]], ...] = DEFAULT_INDUSTRY_KEYWORDS
    source_reputations: Mapping[str, SourceReputation] = field(
        default_factory=lambda: dict(DEFAULT_SOURCE_REPUTATIONS)
    )
    timezone: str = "America/New_York"
    business_hours_start: int = 9
    business_hours_end: int = 18
    business_days: frozenset[int] = frozenset(range(5))
    version: str = "builtin"
    ruleset_sha256: str | None = None

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


DEFAULT_SIGNAL_CONFIG: Final = SignalConfig()


@dataclass(frozen=True)
class FactSet:
    """Facts derived for one evaluation; discarded once the caller is done."""

    industry: Industry
    lead_age_hours: float
    lead_age_known: bool
    budget: float | None
    budget_tier: BudgetTier
    is_business_hours: bool
    local_time: datetime
    lead_source: str | None
    source_reputation: SourceReputation
    current_action: CurrentAction | None = None


def extract_facts(
    lead: LeadRecord,
    now: datetime,
    *,
    context: CoachingContext | None = None,
    config: SignalConfig | None = None,
) -> FactSet:
    """Build the FactSet for ``lead`` as observed at ``now``."""
    cfg = config or DEFAULT_SIGNAL_CONFIG
    current = ensure_aware(now)
    lead_source = normalize_source(lead.lead_source)

    if lead.created_at is None:
        age_hours, age_known = 0.0, False
    else:
        elapsed = (current - lead.created_at).total_seconds() / 3600
        age_hours, age_known = max(0.0, elapsed), True

    return FactSet(
        industry=infer_industry(lead.company, lead.notes, config=cfg),
        lead_age_hours=age_hours,
        lead_age_known=age_known,
        budget=lead.budget,
        budget_tier=budget_tier(lead.budget),
        is_business_hours=is_business_hours(current, config=cfg),
        local_time=current.astimezone(cfg.zone),
        lead_source=lead_source,
        source_reputation=source_reputation(lead_source, config=cfg),
        current_action=context.current_action if context else None,
    )


def ensure_aware(now: Any) -> datetime:
    """Reject non-datetime clocks and interpret naive values as UTC."""
    if not isinstance(now, datetime):
        raise InvalidInputError(
            f"now must be a datetime, got {type(now).__name__}.",
            code="422_INVALID_CLOCK",
        )
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def infer_industry(
    company: str | None,
    notes: str | None,
    *,
    config: SignalConfig | None = None,
) -> Industry:
    text = f"{company or ''} {notes or ''}".lower()
    for industry, keywords in (config or DEFAULT_SIGNAL_CONFIG).industry_keywords:
        if any(keyword in text for keyword in keywords):
            return industry
    return Industry.GENERAL


def budget_tier(budget: float | None) -> BudgetTier:
    if not budget or budget <= 0:
        return BudgetTier.NONE
    if budget >= HIGH_BUDGET_THRESHOLD:
        return BudgetTier.HIGH
    if budget > STANDARD_BUDGET_THRESHOLD:
        return BudgetTier.STANDARD
    return BudgetTier.NONE


def is_business_hours(now: datetime, *, config: SignalConfig | None = None) -> bool:
    cfg = config or DEFAULT_SIGNAL_CONFIG
    local = ensure_aware(now).astimezone(cfg.zone)
    if local.weekday() not in cfg.business_days:
        return False
    return cfg.business_hours_start <= local.hour < cfg.business_hours_end


def normalize_source(lead_source: str | None) -> str | None:
    if not lead_source:
        return None
    normalized = lead_source.strip().lower()
    return normalized or None


def source_reputation(lead_source: str | None, *, config: SignalConfig | None = None) -> SourceReputation:
    if not lead_source:
        return SourceReputation.UNKNOWN
    table = (config or DEFAULT_SIGNAL_CONFIG).source_reputations
    return table.get(lead_source, SourceReputation.UNKNOWN)


def signal_config_from_settings(app_settings: Any) -> SignalConfig:
    """Resolve the extractor tables for the running service."""
    if app_settings.coaching_signals_path:
        return load_signal_config(Path(app_settings.coaching_signals_path))
    start, end = _validate_hours(app_settings.business_hours_start, app_settings.business_hours_end)
    return replace(
        DEFAULT_SIGNAL_CONFIG,
        timezone=_validate_timezone(app_settings.business_timezone),
        business_hours_start=start,
        business_hours_end=end,
        business_days=_parse_days(app_settings.business_days),
    )


def load_signal_config(path: Path) -> SignalConfig:
    """Load and validate a signal-table YAML file."""
    target = path.expanduser()
    if not target.exists():
        raise SignalConfigError(f"Signal config not found at {target}", code="SIGNALS_LOAD_ERROR")
    try:
        parsed = yaml.safe_load(target.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise SignalConfigError(f"Unable to parse YAML: {exc}", code="SIGNALS_SCHEMA_INVALID") from exc
    if not isinstance(parsed, Mapping):
        raise SignalConfigError("Signal config must be a mapping.", code="SIGNALS_SCHEMA_INVALID")

    version = str(parsed.get("version") or "").strip()
    if not version:
        raise SignalConfigError("version is required.", code="SIGNALS_SCHEMA_INVALID")

    hours = parsed.get("business_hours") or {}
    if not isinstance(hours, Mapping):
        raise SignalConfigError("business_hours must be a mapping.", code="SIGNALS_SCHEMA_INVALID")
    start, end = _validate_hours(
        hours.get("start", DEFAULT_SIGNAL_CONFIG.business_hours_start),
        hours.get("end", DEFAULT_SIGNAL_CONFIG.business_hours_end),
    )

    config = SignalConfig(
        industry_keywords=_parse_industries(parsed.get("industries")),
        source_reputations=_parse_sources(parsed.get("sources")),
        timezone=_validate_timezone(str(parsed.get("timezone") or DEFAULT_SIGNAL_CONFIG.timezone)),
        business_hours_start=start,
        business_hours_end=end,
        business_days=_parse_days(hours.get("days")),
        version=version,
        ruleset_sha256=_canonical_sha(parsed),
    )
    logger.info("Loaded coaching signals version=%s sha=%s", config.version, config.ruleset_sha256)
    return config


def _parse_industries(raw: Any) -> tuple[tuple[Industry, tuple[str, ...]], ...]:
    if raw is None:
        return DEFAULT_INDUSTRY_KEYWORDS
    if not isinstance(raw, Sequence) or isinstance(raw, str) or not raw:
        raise SignalConfigError("industries must be a non-empty list.", code="SIGNALS_SCHEMA_INVALID")
    parsed: list[tuple[Industry, tuple[str, ...]]] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            raise SignalConfigError("industries entries must be mappings.", code="SIGNALS_SCHEMA_INVALID")
        try:
            industry = Industry(str(entry.get("industry")))
        except ValueError as exc:
            raise SignalConfigError(
                f"Unsupported industry: {entry.get('industry')}", code="SIGNALS_SCHEMA_INVALID"
            ) from exc
        if industry is Industry.GENERAL:
            raise SignalConfigError("general is the fallback and takes no keywords.", code="SIGNALS_SCHEMA_INVALID")
        keywords = entry.get("keywords")
        if not isinstance(keywords, Sequence) or isinstance(keywords, str) or not keywords:
            raise SignalConfigError(
                f"industries[{industry.value}].keywords must be a non-empty list.",
                code="SIGNALS_SCHEMA_INVALID",
            )
        parsed.append((industry, tuple(str(keyword).lower() for keyword in keywords)))
    return tuple(parsed)


def _parse_sources(raw: Any) -> dict[str, SourceReputation]:
    if raw is None:
        return dict(DEFAULT_SOURCE_REPUTATIONS)
    if not isinstance(raw, Mapping):
        raise SignalConfigError("sources must be a mapping.", code="SIGNALS_SCHEMA_INVALID")
    sources: dict[str, SourceReputation] = {}
    for key, value in raw.items():
        try:
            sources[str(key).strip().lower()] = SourceReputation(str(value))
        except ValueError as exc:
            raise SignalConfigError(
                f"sources[{key}] has unsupported reputation {value}", code="SIGNALS_SCHEMA_INVALID"
            ) from exc
    return sources


def _parse_days(raw: Any) -> frozenset[int]:
    if raw is None:
        return DEFAULT_SIGNAL_CONFIG.business_days
    if not isinstance(raw, Sequence) or isinstance(raw, str) or not raw:
        raise SignalConfigError("business_hours.days must be a non-empty list.", code="SIGNALS_SCHEMA_INVALID")
    days: set[int] = set()
    for day in raw:
        key = str(day).strip().lower()[:3]
        if key not in _WEEKDAYS:
            raise SignalConfigError(f"Unknown weekday: {day}", code="SIGNALS_SCHEMA_INVALID")
        days.add(_WEEKDAYS[key])
    return frozenset(days)


def _validate_hours(start: Any, end: Any) -> tuple[int, int]:
    valid = isinstance(start, int) and isinstance(end, int) and not isinstance(start, bool)
    if not valid or not 0 <= start < end <= 24:
        raise SignalConfigError(
            f"Business hours must be integers with 0 <= start < end <= 24, got {start!r}-{end!r}.",
            code="SIGNALS_SCHEMA_INVALID",
        )
    return start, end


def _validate_timezone(name: str) -> str:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise SignalConfigError(f"Unknown timezone: {name}", code="SIGNALS_SCHEMA_INVALID") from exc
    return name


def _canonical_sha(parsed: Mapping[str, Any]) -> str:
    canonical = json.dumps(parsed, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
