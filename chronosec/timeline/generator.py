"""Timeline generator: turns an incident and a framework into dated response steps."""

from __future__ import annotations

import logging
from datetime import datetime

from chronosec.timeline.models import TimelineStep
from chronosec.timeline.rules import DETECT, StepRule, applicable_rules, resolve_rule_set

logger = logging.getLogger("chronosec.timeline")


def _materialize(rule: StepRule, start_time: datetime) -> TimelineStep:
    return TimelineStep(
        id=rule.id,
        title=rule.title,
        description=rule.description,
        time=start_time + rule.offset,
        type=rule.type,
    )


def generate(incident_type: str, start_time: datetime, framework: str) -> list[TimelineStep]:
    """Build the response timeline for an incident under a compliance framework.

    The initial ``detect`` step is always first, at ``start_time``. Exactly one
    rule set contributes the remaining steps; unknown frameworks use the default
    set and unknown incident types just skip the conditional steps. The result
    is sorted by time, keeping table order for steps that share a time.

    ``start_time`` must be at least ``rules.MAX_OFFSET`` before ``datetime.max``;
    later values overflow ``datetime`` and raise ``OverflowError``. The HTTP
    layer rejects them before they get here.
    """
    steps = [_materialize(DETECT, start_time)]
    steps.extend(_materialize(rule, start_time) for rule in applicable_rules(framework, incident_type))
    steps.sort(key=lambda s: s.time)

    logger.debug(
        "Generated %d steps: incident_type=%s framework=%s rule_set=%s",
        len(steps),
        incident_type,
        framework,
        resolve_rule_set(framework),
    )
    return steps
