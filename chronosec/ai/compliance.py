"""Compliance gap check: LLM scores a timeline against a framework's requirements."""

from __future__ import annotations

import logging

from langchain_core.language_models import BaseChatModel

from chronosec.ai.enhancer import serialize_steps
from chronosec.ai.llm import ask, parse_json
from chronosec.ai.models import ComplianceAnalysis, ComplianceItem, ComplianceStatus
from chronosec.telemetry.metrics import ai_fallbacks
from chronosec.timeline.catalog import framework_name
from chronosec.timeline.models import TimelineStep

logger = logging.getLogger("chronosec.ai")

_SYSTEM_PROMPT = """\
You are an expert in cybersecurity compliance frameworks. Analyze the incident \
response timeline and provide a detailed compliance assessment.

For each key requirement, decide whether the timeline is:
- "compliant" (fully meets requirements)
- "partial" (partially meets requirements)
- "non-compliant" (fails to meet requirements)

Respond ONLY with valid JSON matching this schema:
{
  "items": [
    {
      "requirement": "Requirement name",
      "status": "compliant|partial|non-compliant",
      "details": "Explanation of the compliance status",
      "score": 85
    }
  ],
  "overallScore": 75
}
"""


def sample_analysis() -> ComplianceAnalysis:
    return ComplianceAnalysis(
        items=[
            ComplianceItem(
                requirement="Incident documentation",
                status=ComplianceStatus.COMPLIANT,
                details="All required documentation is present in the timeline",
                score=100,
            ),
            ComplianceItem(
                requirement="Notification timeframes",
                status=ComplianceStatus.PARTIAL,
                details="Some notifications may not meet the required timeframes",
                score=70,
            ),
            ComplianceItem(
                requirement="Evidence preservation",
                status=ComplianceStatus.NON_COMPLIANT,
                details="No evidence preservation steps documented",
                score=30,
            ),
        ],
        overall_score=67,
        generated=False,
    )


async def check_compliance(
    llm: BaseChatModel | None,
    steps: list[TimelineStep],
    framework: str,
) -> ComplianceAnalysis:
    """Score each requirement of ``framework``; the sample analysis on failure."""
    if llm is None:
        ai_fallbacks.labels(operation="compliance").inc()
        return sample_analysis()

    fw = framework_name(framework)
    user_content = (
        f"Analyze this incident response timeline for compliance with {fw} requirements.\n"
        "Give a compliance score (0-100) for each requirement and an overall score.\n\n"
        f"Timeline:\n{serialize_steps(steps)}"
    )

    try:
        analysis = ComplianceAnalysis.model_validate(parse_json(await ask(llm, _SYSTEM_PROMPT, user_content)))
    except Exception:
        logger.exception("Compliance check failed; using sample analysis")
        ai_fallbacks.labels(operation="compliance").inc()
        return sample_analysis()

    logger.info("Compliance check for %s: %d requirements, overall=%d", fw, len(analysis.items), analysis.overall_score)
    return analysis
