"""Document metadata shared by all export formats."""

from __future__ import annotations

import math
import random
import re
import string
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from chronosec.timeline.catalog import framework_name, incident_type_name
from chronosec.timeline.models import StepType, TimelineStep

_BASE36 = string.digits + string.ascii_uppercase


class Phase(BaseModel):
    title: str
    description: str
    step_types: list[StepType]


PHASES = [
    Phase(
        title="Phase 1: Detection & Initial Response",
        description=(
            "Identify the incident, gather initial information, and assess its scope. "
            "Quick and accurate detection is critical to minimizing impact."
        ),
        step_types=[StepType.IDENTIFY, StepType.ASSESS, StepType.ANALYZE],
    ),
    Phase(
        title="Phase 2: Containment & Notification",
        description="Limit the spread of the incident and inform the parties the framework requires.",
        step_types=[StepType.CONTAIN, StepType.NOTIFY],
    ),
    Phase(
        title="Phase 3: Remediation & Recovery",
        description="Eliminate the cause of the incident and restore normal operations.",
        step_types=[StepType.REMEDIATE],
    ),
    Phase(
        title="Phase 4: Documentation & Reporting",
        description="Record the response, file required reports, and capture lessons learned.",
        step_types=[StepType.DOCUMENT, StepType.REPORT, StepType.REVIEW],
    ),
]


def _base36(n: int) -> str:
    digits = []
    while True:
        n, r = divmod(n, 36)
        digits.append(_BASE36[r])
        if n == 0:
            return "".join(reversed(digits))


def generate_document_id(now: datetime | None = None) -> str:
    """``DOC-<base36 epoch millis>-<6 random base36 chars>``."""
    now = now or datetime.now(timezone.utc)
    stamp = _base36(int(now.timestamp() * 1000))
    suffix = "".join(random.choices(_BASE36, k=6))
    return f"DOC-{stamp}-{suffix}"


def format_time(dt: datetime, long: bool = False) -> str:
    """``Jan 4, 2024 12:00 AM`` or, with ``long``, ``January 4, 2024 12:00 AM``."""
    month = dt.strftime("%B" if long else "%b")
    hour = dt.hour % 12 or 12
    return f"{month} {dt.day}, {dt.year} {hour}:{dt:%M} {dt:%p}"


def format_date(dt: datetime) -> str:
    return f"{dt:%B} {dt.day}, {dt.year}"


def slugify(text: str) -> str:
    """Lowercase ASCII slug, safe to use in a download filename."""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-") or "incident"


def export_filename(incident_type: str, extension: str, today: datetime | None = None) -> str:
    today = today or datetime.now(timezone.utc)
    return f"{slugify(incident_type_name(incident_type))}-timeline-{today:%Y-%m-%d}.{extension}"


class DocumentContext(BaseModel):
    """Everything a renderer needs to lay out one timeline document."""

    document_id: str
    incident_type: str
    incident_type_name: str
    framework: str
    framework_name: str
    start_time: datetime
    generated_at: datetime
    steps: list[TimelineStep]
    classification: str = ""
    recommendations: list[str] = Field(default_factory=list)
    notes: str = ""
    include_revision_history: bool = False

    @property
    def span_days(self) -> int:
        """Whole days from first to last step, rounded up."""
        if not self.steps:
            return 0
        delta = self.steps[-1].time - self.steps[0].time
        return math.ceil(delta.total_seconds() / 86400)

    def steps_in(self, phase: Phase) -> list[TimelineStep]:
        return [s for s in self.steps if s.type in phase.step_types]


def build_context(
    steps: list[TimelineStep],
    incident_type: str,
    framework: str,
    start_time: datetime,
    classification: str = "",
    recommendations: list[str] | None = None,
    document_id: str | None = None,
    notes: str = "",
    include_revision_history: bool = False,
) -> DocumentContext:
    now = datetime.now(timezone.utc)
    return DocumentContext(
        document_id=document_id or generate_document_id(now),
        incident_type=incident_type,
        incident_type_name=incident_type_name(incident_type),
        framework=framework,
        framework_name=framework_name(framework),
        start_time=start_time,
        generated_at=now,
        steps=sorted(steps, key=lambda s: s.time),
        classification=classification,
        recommendations=recommendations or [],
        notes=notes.strip(),
        include_revision_history=include_revision_history,
    )
