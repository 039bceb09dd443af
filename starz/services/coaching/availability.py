"""Business-hours status shown by customer-facing widgets."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from starz.services.coaching.signals import (
    DEFAULT_SIGNAL_CONFIG,
    SignalConfig,
    ensure_aware,
    is_business_hours,
)

ONLINE_BADGE = "Online Now"
OFFLINE_BADGE = "Will Call Within 24hrs"
ONLINE_GREETING = "Hi! How can we help boost your traffic today?"
OFFLINE_GREETING = (
    "Hi! We're currently offline. Leave us a message and a growth expert will call within 24 business hours!"
)


class AvailabilityStatus(BaseModel):
    online: bool
    badge: str
    greeting: str
    local_time: datetime
    timezone: str


def availability_status(now: datetime, *, config: SignalConfig | None = None) -> AvailabilityStatus:
    cfg = config or DEFAULT_SIGNAL_CONFIG
    current = ensure_aware(now)
    online = is_business_hours(current, config=cfg)
    return AvailabilityStatus(
        online=online,
        badge=ONLINE_BADGE if online else OFFLINE_BADGE,
        greeting=ONLINE_GREETING if online else OFFLINE_GREETING,
        local_time=current.astimezone(cfg.zone),
        timezone=cfg.timezone,
    )
