"""Markdown export."""

from __future__ import annotations

from chronosec.export.document import DocumentContext, format_date, format_time


def render_markdown(ctx: DocumentContext) -> str:
    lines = [
        "# Incident Response Timeline",
        "",
        f"## Document ID: {ctx.document_id}",
        "",
        "## Overview",
        "",
        f"**Incident Type:** {ctx.incident_type_name}  ",
        f"**Framework:** {ctx.framework_name}  ",
        f"**Start Time:** {format_time(ctx.start_time, long=True)}  ",
        f"**Generated:** {format_time(ctx.generated_at, long=True)}",
        "",
        "## Timeline",
    ]

    for step in ctx.steps:
        lines += [
            "",
            f"### {step.title}",
            f"**Time:** {format_time(step.time)}  ",
            f"**Type:** {step.type.value.capitalize()}",
            "",
            step.description,
        ]

    if ctx.recommendations:
        lines += ["", "## Recommendations", ""]
        lines += [f"- {r}" for r in ctx.recommendations]

    if ctx.notes:
        lines += ["", "## Additional Notes", "", ctx.notes]

    lines += [
        "",
        "---",
        f"*Generated on {format_date(ctx.generated_at)} using chronosec*  ",
        f"*Document ID: {ctx.document_id}*",
        "",
    ]
    return "\n".join(lines)
