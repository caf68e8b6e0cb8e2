"""HTML export, laid out for printing or PDF conversion."""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from chronosec.export.document import PHASES, DocumentContext, format_date, format_time
from chronosec.export.references import citation_for, guidance_for, handling_for, references_for

logger = logging.getLogger("chronosec.export")

_TEMPLATE_NAME = "timeline.html.j2"

_env = Environment(
    loader=FileSystemLoader(Path(__file__).parent / "templates"),
    autoescape=select_autoescape(["html", "xml", "j2"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["timefmt"] = format_time
_env.filters["datefmt"] = format_date


def render_html(ctx: DocumentContext) -> str:
    template = _env.get_template(_TEMPLATE_NAME)
    html = template.render(
        doc=ctx,
        phases=[(phase, ctx.steps_in(phase)) for phase in PHASES],
        citation_for=citation_for,
        guidance_for=guidance_for,
        references=references_for(ctx.framework),
        handling=handling_for(ctx.classification) if ctx.classification else None,
    )
    logger.debug("Rendered HTML document %s (%d steps)", ctx.document_id, len(ctx.steps))
    return html
