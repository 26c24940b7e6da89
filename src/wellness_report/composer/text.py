"""Text sanitization, word wrapping and height measurement.

``wrap_text`` is the single source of line breaks: the composer measures
with it before drawing a highlight box and draws the very same lines
afterwards, so box and text can never disagree.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from reportlab.pdfbase.pdfmetrics import stringWidth

# ── Unicode sanitization ────────────────────────────────────────────
# The built-in Helvetica family is WinAnsi-encoded.  LLM output routinely
# carries characters outside cp1252 (narrow spaces, arrows, non-breaking
# hyphens); map the common ones and replace the rest with "?".

_UNICODE_REPLACEMENTS: dict[str, str] = {
    # Dashes / hyphens
    "\u2011": "-",       # non-breaking hyphen
    "\u2010": "-",       # hyphen
    "\u2012": "-",       # figure dash
    "\u2015": "-",       # horizontal bar
    "\u2212": "-",       # minus sign
    # Spaces
    "\u202f": " ",       # narrow no-break space
    "\u00a0": " ",       # non-breaking space
    "\u2009": " ",       # thin space
    "\u200a": " ",       # hair space
    "\u200b": "",        # zero-width space
    "\ufeff": "",        # byte order mark
    # Arrows / symbols
    "\u2192": "->",      # rightwards arrow
    "\u2190": "<-",      # leftwards arrow
    "\u2191": "^",       # upwards arrow
    "\u2193": "v",       # downwards arrow
    "\u2713": "v",       # check mark
    "\u2714": "v",       # heavy check mark
    "\u25cf": "\u2022",  # black circle -> bullet
    "\u25aa": "\u2022",  # small black square -> bullet
    "\u2264": "<=",      # less-than or equal to
    "\u2265": ">=",      # greater-than or equal to
}


class TextLine(NamedTuple):
    """One wrapped line; ``ends_paragraph`` lines are never justified."""

    text: str
    ends_paragraph: bool


def sanitize_text(text: str) -> str:
    """Normalize newlines and reduce *text* to characters Helvetica can draw."""
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\t", "    ")
    for char, replacement in _UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    text = "".join(ch for ch in text if ch == "\n" or ord(ch) >= 32)
    return text.encode("cp1252", errors="replace").decode("cp1252")


def _split_long_word(word: str, font_name: str, font_size: float, width: float) -> list[str]:
    """Break a word wider than *width* into character runs that fit."""
    if stringWidth(word, font_name, font_size) <= width:
        return [word]
    pieces: list[str] = []
    current = ""
    for ch in word:
        if current and stringWidth(current + ch, font_name, font_size) > width:
            pieces.append(current)
            current = ch
        else:
            current += ch
    if current:
        pieces.append(current)
    return pieces


def wrap_text(text: str, font_name: str, font_size: float, width: float) -> list[TextLine]:
    """Greedy word wrap of *text* to *width* points.

    Newlines start a new paragraph; blank lines are kept as empty lines so
    vertical rhythm survives.  An empty string wraps to a single empty line.
    """
    if width <= 0:
        raise ValueError(f"wrap width must be positive, got {width}")

    lines: list[TextLine] = []
    for paragraph in sanitize_text(text).split("\n"):
        words = paragraph.split()
        if not words:
            lines.append(TextLine("", True))
            continue

        current = ""
        for word in words:
            for piece in _split_long_word(word, font_name, font_size, width):
                candidate = f"{current} {piece}" if current else piece
                if not current or stringWidth(candidate, font_name, font_size) <= width:
                    current = candidate
                else:
                    lines.append(TextLine(current, False))
                    current = piece
        lines.append(TextLine(current, True))
    return lines


def block_height(lines: Sequence[TextLine], leading: float) -> float:
    """Height of already wrapped *lines*; the drawing code sizes boxes with this."""
    return len(lines) * leading


def measure_text_height(
    text: str,
    font_name: str,
    font_size: float,
    width: float,
    leading: float,
) -> float:
    """Rendered height of *text* wrapped at *width* with the given leading."""
    return block_height(wrap_text(text, font_name, font_size, width), leading)


def text_width(text: str, font_name: str, font_size: float) -> float:
    return stringWidth(text, font_name, font_size)
