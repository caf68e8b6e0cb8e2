"""AI endpoints: timeline enhancement, recommendations and compliance gap check."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from langchain_core.language_models import BaseChatModel

from chronosec.ai.analyzer import analyze_timeline
from chronosec.ai.compliance import check_compliance
from chronosec.ai.enhancer import enhance_timeline
from chronosec.ai.models import ComplianceAnalysis, EnhancedTimeline, Recommendations
from chronosec.timeline.generator import generate
from chronosec.timeline.schemas import TimelinePayload, TimelineRequest

router = APIRouter(prefix="/ai", tags=["ai"])


def get_llm(request: Request) -> BaseChatModel | None:
    return getattr(request.app.state, "llm", None)


@router.post("/enhance-timeline", response_model=EnhancedTimeline)
async def enhance(req: TimelineRequest, llm: BaseChatModel | None = Depends(get_llm)):
    """Generate the standard timeline and let the LLM refine it."""
    base = generate(req.incident_type, req.start_time, req.framework)
    return await enhance_timeline(llm, base, req.incident_type, req.framework, req.start_time)


@router.post("/analyze", response_model=Recommendations)
async def analyze(payload: TimelinePayload, llm: BaseChatModel | None = Depends(get_llm)):
    return await analyze_timeline(llm, payload.steps, payload.incident_type, payload.framework)


@router.post("/compliance-check", response_model=ComplianceAnalysis)
async def compliance_check(payload: TimelinePayload, llm: BaseChatModel | None = Depends(get_llm)):
    return await check_compliance(llm, payload.steps, payload.framework)
