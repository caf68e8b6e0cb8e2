"""PDF export via WeasyPrint, falling back to the HTML document when it is unavailable."""

from __future__ import annotations

import logging

logger = logging.getLogger("chronosec.export")


def html_to_pdf(html: str) -> bytes | None:
    """Convert a rendered HTML document to PDF bytes, or None when WeasyPrint cannot be loaded."""
    try:
        import weasyprint
    except (ImportError, OSError):
        logger.warning("WeasyPrint unavailable; PDF export falls back to HTML. Install with: pip install weasyprint")
        return None

    return weasyprint.HTML(string=html).write_pdf()
