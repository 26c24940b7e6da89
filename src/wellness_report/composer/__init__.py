"""Report document composition: text measurement, paginated layout and PDF serialization."""

from __future__ import annotations

from wellness_report.composer.composer import ReportComposer, read_logo_size
from wellness_report.composer.layout import (
    ImageOp,
    LayoutCursor,
    LineOp,
    PageBuffer,
    RectOp,
    RenderedDocument,
    TextOp,
)
from wellness_report.composer.renderer import render_pdf
from wellness_report.composer.text import TextLine, block_height, measure_text_height, sanitize_text, wrap_text

__all__ = [
    "ImageOp",
    "LayoutCursor",
    "LineOp",
    "PageBuffer",
    "RectOp",
    "RenderedDocument",
    "ReportComposer",
    "TextLine",
    "TextOp",
    "block_height",
    "measure_text_height",
    "read_logo_size",
    "render_pdf",
    "sanitize_text",
    "wrap_text",
]
