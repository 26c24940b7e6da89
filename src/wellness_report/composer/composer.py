"""Report composer: lays a questionnaire submission out into a paginated PDF.

The composer is a pure function of its inputs.  ``layout`` produces a
``RenderedDocument`` of buffered pages; ``compose`` additionally serializes
it.  No state survives between calls, so one instance may serve concurrent
requests.
"""

from __future__ import annotations

import logging
from datetime import datetime
from io import BytesIO
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader

from wellness_report.composer import styles
from wellness_report.composer.layout import (
    ImageOp,
    LayoutCursor,
    LineOp,
    RectOp,
    RenderedDocument,
    TextOp,
)
from wellness_report.composer.renderer import render_pdf
from wellness_report.composer.text import block_height, sanitize_text, text_width, wrap_text
from wellness_report.core.config import ReportConfig
from wellness_report.exceptions import LogoDecodeError, RenderError
from wellness_report.models import LogoImage, ReportRequest

log = logging.getLogger(__name__)

_WHITE = "#FFFFFF"


def read_logo_size(logo: LogoImage) -> tuple[int, int]:
    """Fully decode *logo* and return its pixel size.

    Raises ``LogoDecodeError`` for anything reportlab/Pillow cannot read,
    including truncated data that only fails once pixels are decoded.
    """
    try:
        reader = ImageReader(BytesIO(logo.data))
        width, height = reader.getSize()
        reader.getRGBData()
    except Exception as exc:
        raise LogoDecodeError(f"Cannot decode {logo.mime_type} logo: {exc}") from exc
    if width <= 0 or height <= 0:
        raise LogoDecodeError(f"Logo has empty dimensions {width}x{height}")
    return int(width), int(height)


class ReportComposer:
    """Builds the wellness PDF report from a ``ReportRequest`` and analysis text."""

    def __init__(self, config: ReportConfig | None = None) -> None:
        self._config = config or ReportConfig()
        self._page_width, self._page_height = A4
        self._margin = self._config.margin

    # ── Public API ───────────────────────────────────────────────────

    def compose(
        self,
        request: ReportRequest,
        analysis: str,
        *,
        generated_at: Optional[datetime] = None,
    ) -> bytes:
        """Render *request* plus *analysis* to PDF bytes.

        Raises ``RenderError`` on any layout or serialization failure; a
        partially drawn document is never returned.
        """
        try:
            document = self.layout(request, analysis, generated_at=generated_at)
        except Exception as exc:
            raise RenderError(f"Failed to lay out report for {request.submitter_name!r}: {exc}") from exc
        return self.render(document)

    def render(self, document: RenderedDocument) -> bytes:
        """Serialize an already laid-out document.  Raises ``RenderError``."""
        try:
            return render_pdf(document)
        except Exception as exc:
            raise RenderError(f"Failed to serialize {document.page_count}-page report: {exc}") from exc

    def layout(
        self,
        request: ReportRequest,
        analysis: str,
        *,
        generated_at: Optional[datetime] = None,
    ) -> RenderedDocument:
        """Lay out every page and stamp footers, without serializing."""
        stamp = (generated_at or datetime.now()).strftime(self._config.timestamp_format)
        document = RenderedDocument(
            page_width=self._page_width,
            page_height=self._page_height,
            margin=self._margin,
            title=f"{self._config.product_name} - {sanitize_text(request.submitter_name)}",
            author=self._config.product_name,
        )
        cursor = LayoutCursor(document)

        self._draw_header(cursor, self._resolve_logo(request.logo), stamp)
        self._draw_identity(cursor, request, stamp)
        self._draw_answers(cursor, request.answers)
        self._draw_analysis(cursor, analysis)
        self._stamp_footers(document)

        log.debug(
            "Report laid out",
            extra={"pages": document.page_count, "answers": len(request.answers)},
        )
        return document

    @property
    def content_type(self) -> str:
        return "application/pdf"

    # ── Header band ──────────────────────────────────────────────────

    def _resolve_logo(self, logo: LogoImage | None) -> tuple[LogoImage, float, float] | None:
        """Return ``(logo, width, height)`` in points, or None when absent or unreadable."""
        if logo is None:
            return None
        try:
            px_width, px_height = read_logo_size(logo)
        except LogoDecodeError as exc:
            log.warning("Skipping logo: %s", exc)
            return None

        width = self._config.logo_width
        height = width * px_height / px_width
        if height > styles.LOGO_MAX_HEIGHT:
            width = width * styles.LOGO_MAX_HEIGHT / height
            height = styles.LOGO_MAX_HEIGHT
        return logo, width, height

    def _draw_header(
        self,
        cursor: LayoutCursor,
        logo: tuple[LogoImage, float, float] | None,
        stamp: str,
    ) -> None:
        # The band ignores margins and spans the full page width
        cursor.add(
            RectOp(0.0, 0.0, self._page_width, styles.BAND_HEIGHT, self._config.primary_color, role="band")
        )
        if logo is not None:
            image, width, height = logo
            top = styles.LOGO_TOP + (styles.LOGO_MAX_HEIGHT - height) / 2
            cursor.add(ImageOp(styles.LOGO_X, top, width, height, image.data, role="logo"))

        cursor.add(
            TextOp(
                styles.TITLE_X,
                styles.TITLE_BASELINE,
                sanitize_text(self._config.product_name),
                styles.FONT_BOLD,
                styles.TITLE_SIZE,
                _WHITE,
                role="title",
            )
        )
        cursor.add(
            TextOp(
                self._margin,
                styles.STAMP_BASELINE,
                f"Gerado em {stamp}",
                styles.FONT_REGULAR,
                styles.STAMP_SIZE,
                self._config.muted_color,
                align="right",
                width=self._content_width,
                role="header_timestamp",
            )
        )
        cursor.move_to(max(styles.CONTENT_TOP_AFTER_BAND, self._margin))

    # ── Identity block ───────────────────────────────────────────────

    def _draw_identity(self, cursor: LayoutCursor, request: ReportRequest, stamp: str) -> None:
        size = styles.IDENTITY_SIZE
        line_height = styles.leading(size)
        name_text = sanitize_text(f"{styles.NAME_LABEL}{request.submitter_name}")
        email_text = (
            sanitize_text(f"{styles.IDENTITY_SEPARATOR}{styles.EMAIL_LABEL}{request.submitter_email}")
            if request.submitter_email
            else ""
        )

        name_width = text_width(name_text, styles.FONT_REGULAR, size)
        email_width = text_width(email_text, styles.FONT_REGULAR, size)

        if email_text and name_width + email_width <= self._content_width:
            # Name and email share one line, email in muted color
            cursor.ensure(line_height)
            baseline = cursor.y + size
            cursor.add(
                TextOp(self._margin, baseline, name_text, styles.FONT_REGULAR, size,
                       self._config.text_color, role="name")
            )
            cursor.add(
                TextOp(self._margin + name_width, baseline, email_text, styles.FONT_REGULAR, size,
                       self._config.muted_color, role="email")
            )
            cursor.advance(line_height)
        else:
            self._draw_wrapped(cursor, name_text, styles.FONT_REGULAR, size,
                               self._config.text_color, role="name")
            if email_text:
                self._draw_wrapped(cursor, email_text.strip(), styles.FONT_REGULAR, size,
                                   self._config.muted_color, role="email")

        cursor.advance(line_height * 0.5)
        self._draw_wrapped(
            cursor,
            f"{styles.GENERATED_LABEL}{stamp}",
            styles.FONT_REGULAR,
            styles.META_SIZE,
            self._config.muted_color,
            role="generated_at",
        )
        cursor.advance(line_height * 1.5)

    # ── Answers section ──────────────────────────────────────────────

    def _draw_answers(self, cursor: LayoutCursor, answers: dict[str, str]) -> None:
        body_leading = styles.leading(styles.BODY_SIZE)
        # Rule gap plus the first question line
        self._draw_section_title(cursor, styles.ANSWERS_TITLE, keep_with=body_leading * 1.5)

        rule_y = cursor.y - styles.RULE_OUTSET
        cursor.add(
            LineOp(
                self._margin - styles.RULE_OUTSET,
                rule_y,
                self._page_width - self._margin + styles.RULE_OUTSET,
                rule_y,
                self._config.primary_color,
                line_width=styles.RULE_WIDTH,
                role="rule",
            )
        )
        cursor.advance(body_leading * 0.5)

        for index, (question, answer) in enumerate(answers.items()):
            self._draw_wrapped(
                cursor,
                f"{styles.QUESTION_BULLET}{question}",
                styles.FONT_BOLD,
                styles.BODY_SIZE,
                self._config.text_color,
                role="question",
                item=index,
            )
            self._draw_wrapped(
                cursor,
                answer,
                styles.FONT_ITALIC,
                styles.BODY_SIZE,
                self._config.muted_color,
                indent=styles.ANSWER_INDENT,
                role="answer",
                item=index,
            )
            cursor.advance(body_leading * styles.PAIR_SPACING_LINES)

        cursor.advance(body_leading * styles.SECTION_GAP_LINES)

    # ── Analysis section ─────────────────────────────────────────────

    def _draw_analysis(self, cursor: LayoutCursor, analysis: str) -> None:
        size = styles.BODY_SIZE
        line_height = styles.leading(size)
        padding = styles.HIGHLIGHT_PADDING
        # The title stays with the first padded line of the highlight box
        self._draw_section_title(cursor, styles.ANALYSIS_TITLE, keep_with=2 * padding + line_height)

        box_x = self._margin - styles.HIGHLIGHT_OUTSET
        box_width = self._content_width + 2 * styles.HIGHLIGHT_OUTSET
        text_x = box_x + styles.HIGHLIGHT_TEXT_INSET
        inner_width = self.analysis_text_width

        # Measurement pass: the box is sized from these lines before any is drawn
        lines = wrap_text(analysis, styles.FONT_REGULAR, size, inner_width)

        start = 0
        while start < len(lines):
            cursor.ensure(2 * padding + line_height)
            fit = int((cursor.remaining - 2 * padding + 1e-6) // line_height)
            chunk = lines[start:start + max(fit, 1)]

            box_top = cursor.y
            box_height = block_height(chunk, line_height) + 2 * padding
            cursor.add(
                RectOp(box_x, box_top, box_width, box_height, self._config.primary_color,
                       opacity=styles.HIGHLIGHT_OPACITY, role="analysis_highlight")
            )

            line_top = box_top + padding
            for line in chunk:
                cursor.add(
                    TextOp(
                        text_x,
                        line_top + size,
                        line.text,
                        styles.FONT_REGULAR,
                        size,
                        self._config.text_color,
                        align="left" if line.ends_paragraph else "justify",
                        width=inner_width,
                        role="analysis",
                    )
                )
                line_top += line_height

            cursor.move_to(box_top + box_height)
            start += len(chunk)
            if start < len(lines):
                cursor.break_page()

        cursor.advance(line_height * 2)

    @property
    def analysis_text_width(self) -> float:
        """Width the analysis is wrapped (and measured) at inside the highlight box."""
        box_width = self._content_width + 2 * styles.HIGHLIGHT_OUTSET
        return box_width - 2 * styles.HIGHLIGHT_TEXT_INSET

    # ── Footer pass ──────────────────────────────────────────────────

    def _stamp_footers(self, document: RenderedDocument) -> None:
        """Second pass over the buffered pages, now that the count is final."""
        count = document.page_count
        baseline = self._page_height - styles.FOOTER_BASELINE_FROM_BOTTOM
        for page in document.pages:
            page.add(
                TextOp(
                    self._margin,
                    baseline,
                    styles.FOOTER_TEMPLATE.format(
                        product=sanitize_text(self._config.product_name),
                        page=page.index + 1,
                        count=count,
                    ),
                    styles.FONT_REGULAR,
                    styles.FOOTER_SIZE,
                    self._config.muted_color,
                    align="center",
                    width=self._content_width,
                    role="footer",
                )
            )

    # ── Helpers ──────────────────────────────────────────────────────

    @property
    def _content_width(self) -> float:
        return self._page_width - 2 * self._margin

    def _draw_section_title(self, cursor: LayoutCursor, title: str, *, keep_with: float) -> None:
        """Draw an underlined title, first breaking the page unless *keep_with* more points fit after it."""
        size = styles.SECTION_SIZE
        gap = styles.leading(styles.BODY_SIZE) * 0.5
        cursor.ensure(styles.leading(size) + gap + keep_with)
        self._draw_wrapped(
            cursor,
            title,
            styles.FONT_BOLD,
            size,
            self._config.primary_color,
            underline=True,
            role="section_title",
        )
        cursor.advance(gap)

    def _draw_wrapped(
        self,
        cursor: LayoutCursor,
        text: str,
        font: str,
        size: float,
        color: str,
        *,
        indent: float = 0.0,
        underline: bool = False,
        role: str = "",
        item: int | None = None,
    ) -> None:
        """Draw *text* line by line, breaking pages between lines as needed."""
        line_height = styles.leading(size)
        x = self._margin + indent
        for line in wrap_text(text, font, size, self._content_width - indent):
            cursor.ensure(line_height)
            cursor.add(
                TextOp(x, cursor.y + size, line.text, font, size, color,
                       underline=underline, role=role, item=item)
            )
            cursor.advance(line_height)
