"""Data models for AI-assisted timeline analysis."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from chronosec.timeline.models import TimelineStep


class EnhancedTimeline(BaseModel):
    """Timeline returned by the enhancement path; ``enhanced`` is False on fallback."""

    timeline: list[TimelineStep]
    recommendations: list[str] = []
    enhanced: bool = True


class Recommendations(BaseModel):
    recommendations: list[str]
    generated: bool = True


class ComplianceStatus(str, Enum):
    COMPLIANT = "compliant"
    PARTIAL = "partial"
    NON_COMPLIANT = "non-compliant"


class ComplianceItem(BaseModel):
    requirement: str
    status: ComplianceStatus
    details: str
    score: int = Field(ge=0, le=100)


class ComplianceAnalysis(BaseModel):
    """Per-requirement compliance assessment of a timeline."""

    model_config = {"populate_by_name": True}

    items: list[ComplianceItem]
    overall_score: int = Field(alias="overallScore", ge=0, le=100)
    generated: bool = True
