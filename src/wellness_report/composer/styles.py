"""Centralized style constants for the report layout.

Colors are supplied by ``ReportConfig``; everything here is geometry and
typography.  All distances are PDF points, vertical ones measured from the
top of the page.
"""

from __future__ import annotations

# ── Fonts ────────────────────────────────────────────────────────────
# Built-in Type 1 fonts: no embedding, metrics ship with reportlab.

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"

TITLE_SIZE = 20
IDENTITY_SIZE = 12
META_SIZE = 10
SECTION_SIZE = 14
BODY_SIZE = 11
STAMP_SIZE = 9
FOOTER_SIZE = 9

# Leading as a multiple of font size
LINE_SPACING = 1.25

# ── Header band ──────────────────────────────────────────────────────

BAND_HEIGHT = 80.0
LOGO_X = 50.0
LOGO_TOP = 10.0
LOGO_MAX_HEIGHT = 60.0
TITLE_X = 130.0
TITLE_BASELINE = 50.0
STAMP_BASELINE = BAND_HEIGHT + 14.0
CONTENT_TOP_AFTER_BAND = BAND_HEIGHT + 32.0

# ── Sections ─────────────────────────────────────────────────────────

IDENTITY_SEPARATOR = "   |   "
QUESTION_BULLET = "• "
ANSWER_INDENT = 12.0
PAIR_SPACING_LINES = 0.3
SECTION_GAP_LINES = 1.2
RULE_OUTSET = 5.0
RULE_WIDTH = 0.5

# ── Analysis highlight box ───────────────────────────────────────────

HIGHLIGHT_OUTSET = 5.0
HIGHLIGHT_TEXT_INSET = 10.0
HIGHLIGHT_PADDING = 8.0
HIGHLIGHT_OPACITY = 0.05

# ── Footer ───────────────────────────────────────────────────────────

FOOTER_BASELINE_FROM_BOTTOM = 30.0
FOOTER_TEMPLATE = "{product} — Página {page} de {count}"

# ── Section titles (pt-BR, as delivered to end users) ────────────────

ANSWERS_TITLE = "Respostas do Formulário"
ANALYSIS_TITLE = "Análise e Recomendações"
NAME_LABEL = "Nome: "
EMAIL_LABEL = "Email: "
GENERATED_LABEL = "Gerado em: "


def leading(size: float) -> float:
    """Line advance for a font size."""
    return size * LINE_SPACING
