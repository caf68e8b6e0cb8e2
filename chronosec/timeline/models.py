"""Data models for generated response timelines."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class StepType(str, Enum):
    IDENTIFY = "identify"
    NOTIFY = "notify"
    CONTAIN = "contain"
    DOCUMENT = "document"
    REMEDIATE = "remediate"
    REPORT = "report"
    ASSESS = "assess"
    ANALYZE = "analyze"
    REVIEW = "review"


class TimelineStep(BaseModel):
    """A single dated action in an incident-response timeline."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    time: datetime
    type: StepType
