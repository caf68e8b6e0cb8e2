"""Request and response bodies shared by the timeline, AI and export routes."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

from chronosec.config import settings
from chronosec.timeline.models import TimelineStep
from chronosec.timeline.rules import MAX_OFFSET


def _as_utc(dt: datetime) -> datetime:
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


class TimelineRequest(BaseModel):
    incident_type: str
    framework: str = Field(default_factory=lambda: settings.default_framework)
    start_time: datetime

    @field_validator("start_time")
    @classmethod
    def _leaves_room_for_steps(cls, v: datetime) -> datetime:
        try:
            v + MAX_OFFSET
        except OverflowError:
            raise ValueError(f"start_time must be at least {MAX_OFFSET.days} days before {datetime.max.year}-12-31")
        return v


class TimelineResponse(BaseModel):
    incident_type: str
    incident_type_name: str
    framework: str
    framework_name: str
    start_time: datetime
    steps: list[TimelineStep]


class TimelinePayload(BaseModel):
    """An already generated (or AI-enhanced) timeline sent back by a client.

    Naive times are read as UTC so that steps from different sources still sort.
    """

    incident_type: str
    framework: str
    start_time: datetime
    steps: list[TimelineStep] = Field(min_length=1)

    @field_validator("start_time")
    @classmethod
    def _start_as_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)

    @field_validator("steps")
    @classmethod
    def _steps_as_utc(cls, v: list[TimelineStep]) -> list[TimelineStep]:
        return [s if s.time.tzinfo is not None else s.model_copy(update={"time": _as_utc(s.time)}) for s in v]


class ProgressRequest(TimelineRequest):
    completed_ids: list[str] = []
