"""Export endpoints: download a timeline as Markdown, HTML or PDF."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from urllib.parse import quote

from fastapi import APIRouter
from pydantic import Field
from starlette.concurrency import run_in_threadpool
from starlette.responses import Response

from chronosec.config import settings
from chronosec.export.document import DocumentContext, build_context, export_filename
from chronosec.export.html import render_html
from chronosec.export.markdown import render_markdown
from chronosec.export.pdf import html_to_pdf
from chronosec.telemetry.metrics import exports_total
from chronosec.timeline.schemas import TimelinePayload

logger = logging.getLogger("chronosec.export")
router = APIRouter(prefix="/export", tags=["export"])


class ExportRequest(TimelinePayload):
    classification: str | None = None
    recommendations: list[str] = []
    # Sent back in the X-Document-Id header, so restricted to header-safe characters.
    document_id: str | None = Field(default=None, pattern=r"^[A-Za-z0-9][A-Za-z0-9._-]{0,63}$")
    notes: str = ""
    include_revision_history: bool = True


def _context(req: ExportRequest) -> DocumentContext:
    classification = settings.document_classification if req.classification is None else req.classification
    return build_context(
        req.steps,
        req.incident_type,
        req.framework,
        req.start_time,
        classification=classification,
        recommendations=req.recommendations,
        document_id=req.document_id,
        notes=req.notes,
        include_revision_history=req.include_revision_history,
    )


def _download(body: str | bytes, media_type: str, filename: str, ctx: DocumentContext) -> Response:
    return Response(
        content=body,
        media_type=media_type,
        headers={
            "Content-Disposition": f"attachment; filename=\"{filename}\"; filename*=UTF-8''{quote(filename)}",
            "X-Document-Id": ctx.document_id,
        },
    )


@router.post("/markdown")
async def export_markdown(req: ExportRequest):
    ctx = _context(req)
    exports_total.labels(format="markdown").inc()
    filename = f"incident-timeline-{datetime.now(timezone.utc):%Y-%m-%d}.md"
    logger.info("Exporting Markdown document %s", ctx.document_id)
    return _download(render_markdown(ctx), "text/markdown", filename, ctx)


@router.post("/html")
async def export_html(req: ExportRequest):
    ctx = _context(req)
    exports_total.labels(format="html").inc()
    logger.info("Exporting HTML document %s", ctx.document_id)
    return _download(render_html(ctx), "text/html", export_filename(req.incident_type, "html"), ctx)


@router.post("/pdf")
async def export_pdf(req: ExportRequest):
    """PDF download; the HTML document is returned instead when PDF conversion is unavailable."""
    ctx = _context(req)
    html = render_html(ctx)
    pdf = await run_in_threadpool(html_to_pdf, html)
    if pdf is None:
        exports_total.labels(format="html").inc()
        return _download(html, "text/html", export_filename(req.incident_type, "html"), ctx)

    exports_total.labels(format="pdf").inc()
    logger.info("Exporting PDF document %s", ctx.document_id)
    return _download(pdf, "application/pdf", export_filename(req.incident_type, "pdf"), ctx)
