"""Timeline analyzer: LLM recommendations for improving a response timeline."""

from __future__ import annotations

import logging
import re

from langchain_core.language_models import BaseChatModel

from chronosec.ai.enhancer import serialize_steps
from chronosec.ai.llm import ask
from chronosec.ai.models import Recommendations
from chronosec.telemetry.metrics import ai_fallbacks
from chronosec.timeline.catalog import framework_name, incident_type_name
from chronosec.timeline.models import TimelineStep

logger = logging.getLogger("chronosec.ai")

SAMPLE_RECOMMENDATIONS = [
    "Ensure all stakeholders are notified within the required timeframe",
    "Document all containment actions taken during the incident",
    "Review your incident response plan for compliance gaps",
]

_SYSTEM_PROMPT = """\
You are an expert in cybersecurity incident response and compliance frameworks. \
Provide clear, actionable recommendations based on the incident timeline.

Format the answer as a bulleted list, one recommendation per bullet, no preamble.
"""

_BULLET = re.compile(r"^\s*(?:[•\-*]|\d+[.)])\s+(.*)$")


def split_bullets(text: str) -> list[str]:
    """Split a bulleted (or numbered) list into its items.

    Lines that do not start a bullet continue the previous item and any text
    before the first bullet is dropped. Text without bullet markers yields one
    item per non-empty line.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not any(_BULLET.match(line) for line in lines):
        return [line.strip() for line in lines]

    items: list[str] = []
    for line in lines:
        match = _BULLET.match(line)
        if match:
            items.append(match.group(1).strip())
        elif items:
            items[-1] = f"{items[-1]} {line.strip()}"
    return [i for i in items if i]


async def analyze_timeline(
    llm: BaseChatModel | None,
    steps: list[TimelineStep],
    incident_type: str,
    framework: str,
) -> Recommendations:
    """3-5 recommendations for the timeline; the sample set when the LLM is unavailable."""
    if llm is None:
        ai_fallbacks.labels(operation="analyze").inc()
        return Recommendations(recommendations=list(SAMPLE_RECOMMENDATIONS), generated=False)

    user_content = (
        "Analyze this incident response timeline and provide 3-5 specific recommendations "
        "to improve compliance and effectiveness:\n\n"
        f"Incident Type: {incident_type_name(incident_type)}\n"
        f"Compliance Framework: {framework_name(framework)}\n"
        f"Timeline:\n{serialize_steps(steps)}\n\n"
        "Focus on:\n"
        "1. Compliance gaps or risks\n"
        "2. Process improvements\n"
        "3. Documentation requirements\n"
        "4. Communication strategies\n"
        "5. Technical controls"
    )

    try:
        recommendations = split_bullets(await ask(llm, _SYSTEM_PROMPT, user_content))
        if not recommendations:
            raise ValueError("no recommendations in response")
    except Exception:
        logger.exception("Timeline analysis failed; using sample recommendations")
        ai_fallbacks.labels(operation="analyze").inc()
        return Recommendations(recommendations=list(SAMPLE_RECOMMENDATIONS), generated=False)

    logger.info("Generated %d recommendations for %s/%s", len(recommendations), incident_type, framework)
    return Recommendations(recommendations=recommendations)
