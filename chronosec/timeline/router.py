"""Timeline endpoints: catalogs, generation and view projections."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from opentelemetry import trace

from chronosec.telemetry.metrics import timelines_generated
from chronosec.timeline.catalog import FRAMEWORKS, INCIDENT_TYPES, framework_name, incident_type_name
from chronosec.timeline.generator import generate
from chronosec.timeline.rules import resolve_rule_set
from chronosec.timeline.schemas import ProgressRequest, TimelineRequest, TimelineResponse
from chronosec.timeline.views import (
    CalendarDay,
    CompletionSummary,
    GanttChart,
    calendar_days,
    completion_summary,
    gantt_chart,
)

logger = logging.getLogger("chronosec.timeline")
router = APIRouter(prefix="/timeline", tags=["timeline"])
tracer = trace.get_tracer(__name__)


def build_timeline(req: TimelineRequest) -> TimelineResponse:
    with tracer.start_as_current_span("generate-timeline") as span:
        rule_set = resolve_rule_set(req.framework)
        span.set_attribute("timeline.incident_type", req.incident_type)
        span.set_attribute("timeline.rule_set", rule_set)

        steps = generate(req.incident_type, req.start_time, req.framework)
        timelines_generated.labels(framework=rule_set).inc()

        logger.info(
            "Timeline generated: incident_type=%s framework=%s steps=%d",
            req.incident_type,
            rule_set,
            len(steps),
        )
        return TimelineResponse(
            incident_type=req.incident_type,
            incident_type_name=incident_type_name(req.incident_type),
            framework=req.framework,
            framework_name=framework_name(req.framework),
            start_time=req.start_time,
            steps=steps,
        )


@router.get("/incident-types")
async def list_incident_types():
    return {"incident_types": INCIDENT_TYPES}


@router.get("/frameworks")
async def list_frameworks():
    return {"frameworks": FRAMEWORKS}


@router.post("/generate", response_model=TimelineResponse)
async def generate_timeline(req: TimelineRequest):
    return build_timeline(req)


@router.post("/calendar", response_model=list[CalendarDay])
async def timeline_calendar(req: TimelineRequest):
    """Timeline steps bucketed by calendar day."""
    return calendar_days(build_timeline(req).steps)


@router.post("/gantt", response_model=GanttChart)
async def timeline_gantt(req: TimelineRequest):
    """Timeline steps placed on a day axis starting at detection."""
    return gantt_chart(build_timeline(req).steps)


@router.post("/progress", response_model=CompletionSummary)
async def timeline_progress(req: ProgressRequest):
    """Completion counts for the step ids a client has marked done."""
    return completion_summary(build_timeline(req).steps, req.completed_ids)
