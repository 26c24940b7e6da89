"""Serialize a ``RenderedDocument`` to PDF bytes with reportlab's canvas."""

from __future__ import annotations

from io import BytesIO

from reportlab.lib.colors import HexColor
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen.canvas import Canvas

from wellness_report.composer.layout import (
    DrawOp,
    ImageOp,
    LineOp,
    RectOp,
    RenderedDocument,
    TextOp,
)

_UNDERLINE_OFFSET = 2.0


def render_pdf(document: RenderedDocument) -> bytes:
    """Draw every buffered page in order and return the finished PDF."""
    buffer = BytesIO()
    canvas = Canvas(buffer, pagesize=(document.page_width, document.page_height))
    if document.title:
        canvas.setTitle(document.title)
    if document.author:
        canvas.setAuthor(document.author)

    for page in document.pages:
        for op in page.ops:
            _draw(canvas, op, document.page_height)
        canvas.showPage()

    canvas.save()
    return buffer.getvalue()


def _draw(canvas: Canvas, op: DrawOp, page_height: float) -> None:
    if isinstance(op, TextOp):
        _draw_text(canvas, op, page_height)
    elif isinstance(op, RectOp):
        _draw_rect(canvas, op, page_height)
    elif isinstance(op, LineOp):
        _draw_line(canvas, op, page_height)
    elif isinstance(op, ImageOp):
        _draw_image(canvas, op, page_height)
    else:
        raise TypeError(f"Unsupported draw op: {type(op).__name__}")


def _draw_rect(canvas: Canvas, op: RectOp, page_height: float) -> None:
    canvas.saveState()
    canvas.setFillColor(HexColor(op.color))
    canvas.setFillAlpha(op.opacity)
    canvas.rect(op.x, page_height - op.y - op.height, op.width, op.height, stroke=0, fill=1)
    canvas.restoreState()


def _draw_line(canvas: Canvas, op: LineOp, page_height: float) -> None:
    canvas.saveState()
    canvas.setStrokeColor(HexColor(op.color))
    canvas.setLineWidth(op.line_width)
    canvas.line(op.x1, page_height - op.y1, op.x2, page_height - op.y2)
    canvas.restoreState()


def _draw_image(canvas: Canvas, op: ImageOp, page_height: float) -> None:
    canvas.drawImage(
        ImageReader(BytesIO(op.data)),
        op.x,
        page_height - op.y - op.height,
        width=op.width,
        height=op.height,
        mask="auto",
    )


def _draw_text(canvas: Canvas, op: TextOp, page_height: float) -> None:
    if not op.text:
        return

    baseline = page_height - op.y
    line_width = stringWidth(op.text, op.font, op.size)

    canvas.saveState()
    canvas.setFont(op.font, op.size)
    canvas.setFillColor(HexColor(op.color))

    if op.align == "right":
        start_x = op.x + op.width - line_width
        canvas.drawString(start_x, baseline, op.text)
    elif op.align == "center":
        start_x = op.x + (op.width - line_width) / 2
        canvas.drawString(start_x, baseline, op.text)
    elif op.align == "justify" and op.text.count(" ") > 0 and line_width < op.width:
        start_x = op.x
        line_width = op.width
        # Tw stretches every ASCII space in the run
        text_obj = canvas.beginText(start_x, baseline)
        text_obj.setFont(op.font, op.size)
        text_obj.setWordSpace((op.width - stringWidth(op.text, op.font, op.size)) / op.text.count(" "))
        text_obj.textOut(op.text)
        canvas.drawText(text_obj)
    else:
        start_x = op.x
        canvas.drawString(start_x, baseline, op.text)

    if op.underline:
        canvas.setStrokeColor(HexColor(op.color))
        canvas.setLineWidth(max(op.size / 20.0, 0.5))
        canvas.line(start_x, baseline - _UNDERLINE_OFFSET, start_x + line_width, baseline - _UNDERLINE_OFFSET)

    canvas.restoreState()
