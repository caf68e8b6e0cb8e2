"""Timeline enhancer: LLM refines a generated timeline for a compliance framework.

The generated timeline is always the fallback: any failure to reach the model
or to read its answer returns the base steps unchanged.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime

from langchain_core.language_models import BaseChatModel

from chronosec.ai.llm import ask, parse_json
from chronosec.ai.models import EnhancedTimeline
from chronosec.telemetry.metrics import ai_fallbacks
from chronosec.timeline.catalog import framework_name
from chronosec.timeline.models import TimelineStep

logger = logging.getLogger("chronosec.ai")

_SYSTEM_PROMPT = """\
You are an expert in cybersecurity incident response and compliance frameworks. \
Enhance the provided timeline to ensure it meets all compliance requirements and \
best practices.

Respond ONLY with valid JSON matching this schema:
{
  "timeline": [
    {
      "id": "string",
      "title": "string",
      "description": "string",
      "time": "ISO 8601 date string",
      "type": "identify|notify|contain|document|remediate|report|assess|analyze|review"
    }
  ],
  "recommendations": ["string"]
}
"""


def serialize_steps(steps: list[TimelineStep]) -> str:
    return json.dumps([s.model_dump(mode="json") for s in steps], indent=2)


async def enhance_timeline(
    llm: BaseChatModel | None,
    base: list[TimelineStep],
    incident_type: str,
    framework: str,
    start_time: datetime,
) -> EnhancedTimeline:
    """Ask the LLM to improve ``base``; fall back to ``base`` on any failure."""
    if llm is None:
        logger.info("No LLM configured; returning standard timeline")
        ai_fallbacks.labels(operation="enhance").inc()
        return EnhancedTimeline(timeline=list(base), enhanced=False)

    fw = framework_name(framework)
    user_content = (
        f"I have a basic incident response timeline for a {incident_type} incident "
        f"using the {fw} compliance framework.\n"
        f"The incident started at {start_time.isoformat()}.\n\n"
        f"Base timeline:\n{serialize_steps(base)}\n\n"
        f"Please enhance this timeline by:\n"
        f"1. Adding any missing critical steps required by {fw}\n"
        f"2. Improving descriptions to be more specific and actionable\n"
        f"3. Adjusting timing if any steps don't meet compliance requirements\n"
        f"4. Adding 2-3 framework-specific recommendations"
    )

    try:
        raw = await ask(llm, _SYSTEM_PROMPT, user_content)
        result = EnhancedTimeline.model_validate(parse_json(raw))
        if not result.timeline:
            raise ValueError("enhanced timeline is empty")
        result.timeline.sort(key=lambda s: s.time)
    except Exception:
        logger.exception("Timeline enhancement failed; using standard timeline")
        ai_fallbacks.labels(operation="enhance").inc()
        return EnhancedTimeline(timeline=list(base), enhanced=False)

    logger.info(
        "Timeline enhanced: %d -> %d steps, %d recommendations",
        len(base),
        len(result.timeline),
        len(result.recommendations),
    )
    return result
