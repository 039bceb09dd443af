"""Domain models for CRM leads and the coaching context they are inspected in."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CurrentAction(str, Enum):
    """What the rep is doing with the lead right now."""

    CALLING = "calling"
    EMAILING = "emailing"
    SCHEDULING = "scheduling"
    QUALIFYING = "qualifying"
    CLOSING = "closing"


class LeadRecord(BaseModel):
    """Loosely-typed lead as stored by the CRM contact store.

    Every field is optional. Missing values are treated as "no signal" by the
    coaching and scoring engines rather than as errors.
    """

    id: int | None = None
    name: str | None = None
    company: str | None = None
    notes: str | None = None
    position: str | None = None
    email: str | None = None
    phone: str | None = None
    lead_source: str | None = Field(default=None, alias="leadSource")
    lead_status: str | None = Field(default=None, alias="leadStatus")
    pipeline_stage: str | None = Field(default=None, alias="pipelineStage")
    company_size: str | None = Field(default=None, alias="companySize")
    timeline: str | None = None
    budget: float | None = None
    deal_value: float | None = Field(default=None, alias="dealValue")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    last_contacted_at: datetime | None = Field(default=None, alias="lastContactedAt")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("created_at", "last_contacted_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class CoachingContext(BaseModel):
    """Caller-supplied context for a single lead inspection."""

    current_action: CurrentAction | None = Field(default=None, alias="currentAction")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
