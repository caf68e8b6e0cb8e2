"""Read-only projections of a timeline for calendar and Gantt renderers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date

from pydantic import BaseModel

from chronosec.timeline.models import TimelineStep


class CalendarDay(BaseModel):
    day: date
    steps: list[TimelineStep]


class GanttRow(BaseModel):
    step: TimelineStep
    day_offset: int


class GanttChart(BaseModel):
    start_date: date | None
    total_days: int
    rows: list[GanttRow]


class CompletionSummary(BaseModel):
    total: int
    completed: int
    remaining: int
    percent_complete: float


def group_by_day(steps: Iterable[TimelineStep]) -> dict[date, list[TimelineStep]]:
    """Bucket steps by calendar date, days ascending, step order kept within a day."""
    buckets: dict[date, list[TimelineStep]] = {}
    for step in steps:
        buckets.setdefault(step.time.date(), []).append(step)
    return dict(sorted(buckets.items()))


def calendar_days(steps: Iterable[TimelineStep]) -> list[CalendarDay]:
    return [CalendarDay(day=d, steps=s) for d, s in group_by_day(steps).items()]


def gantt_rows(steps: Sequence[TimelineStep]) -> list[GanttRow]:
    """Place each step on a day axis that starts at the first step's date."""
    if not steps:
        return []
    origin = min(s.time for s in steps).date()
    return [GanttRow(step=s, day_offset=(s.time.date() - origin).days) for s in steps]


def gantt_span(rows: Sequence[GanttRow]) -> int:
    """Number of calendar days the chart covers, first and last day included."""
    if not rows:
        return 0
    return max(r.day_offset for r in rows) + 1


def gantt_chart(steps: Sequence[TimelineStep]) -> GanttChart:
    rows = gantt_rows(steps)
    start = min(s.time for s in steps).date() if steps else None
    return GanttChart(start_date=start, total_days=gantt_span(rows), rows=rows)


def completion_summary(steps: Sequence[TimelineStep], completed_ids: Iterable[str]) -> CompletionSummary:
    """Progress against a timeline; ids that are not in the timeline are ignored."""
    step_ids = {s.id for s in steps}
    done = step_ids.intersection(completed_ids)
    total = len(step_ids)
    percent = round(len(done) / total * 100, 1) if total else 0.0
    return CompletionSummary(
        total=total,
        completed=len(done),
        remaining=total - len(done),
        percent_complete=percent,
    )
