"""Tests for text sanitization, wrapping and measurement."""

from __future__ import annotations

import pytest
from reportlab.pdfbase.pdfmetrics import stringWidth

from wellness_report.composer.styles import BODY_SIZE, FONT_REGULAR, leading
from wellness_report.composer.text import (
    TextLine,
    block_height,
    measure_text_height,
    sanitize_text,
    wrap_text,
)

WIDTH = 200.0


class TestSanitizeText:
    def test_keeps_portuguese_and_cp1252_punctuation(self) -> None:
        text = "Análise — Página “1” • ação"
        assert sanitize_text(text) == text

    def test_maps_common_unicode(self) -> None:
        assert sanitize_text("a\u2192b") == "a->b"
        assert sanitize_text("5\u202fkm") == "5 km"
        assert sanitize_text("pre\u2011op") == "pre-op"

    def test_replaces_unencodable_characters(self) -> None:
        assert sanitize_text("ok \U0001f600") == "ok ?"

    def test_normalizes_newlines_and_drops_control_chars(self) -> None:
        assert sanitize_text("a\r\nb\rc\x07d") == "a\nb\ncd"


class TestWrapText:
    def test_short_text_single_line(self) -> None:
        assert wrap_text("Short report.", FONT_REGULAR, BODY_SIZE, WIDTH) == [TextLine("Short report.", True)]

    def test_every_line_fits_width(self) -> None:
        text = "word " * 200
        lines = wrap_text(text, FONT_REGULAR, BODY_SIZE, WIDTH)
        assert len(lines) > 1
        for line in lines:
            assert stringWidth(line.text, FONT_REGULAR, BODY_SIZE) <= WIDTH

    def test_no_words_lost(self) -> None:
        text = " ".join(f"w{i}" for i in range(300))
        lines = wrap_text(text, FONT_REGULAR, BODY_SIZE, WIDTH)
        assert " ".join(line.text for line in lines).split() == text.split()

    def test_only_last_line_of_paragraph_ends_it(self) -> None:
        lines = wrap_text("lorem ipsum " * 60, FONT_REGULAR, BODY_SIZE, WIDTH)
        assert [line.ends_paragraph for line in lines] == [False] * (len(lines) - 1) + [True]

    def test_newlines_split_paragraphs_and_keep_blank_lines(self) -> None:
        lines = wrap_text("first\n\nsecond", FONT_REGULAR, BODY_SIZE, WIDTH)
        assert lines == [TextLine("first", True), TextLine("", True), TextLine("second", True)]

    def test_empty_text_is_one_empty_line(self) -> None:
        assert wrap_text("", FONT_REGULAR, BODY_SIZE, WIDTH) == [TextLine("", True)]

    def test_overlong_word_is_broken(self) -> None:
        word = "x" * 400
        lines = wrap_text(word, FONT_REGULAR, BODY_SIZE, WIDTH)
        assert len(lines) > 1
        assert "".join(line.text for line in lines) == word
        for line in lines:
            assert stringWidth(line.text, FONT_REGULAR, BODY_SIZE) <= WIDTH

    def test_rejects_non_positive_width(self) -> None:
        with pytest.raises(ValueError):
            wrap_text("text", FONT_REGULAR, BODY_SIZE, 0)


class TestMeasureTextHeight:
    def test_height_is_line_count_times_leading(self) -> None:
        text = "A fairly long sentence that will need wrapping. " * 10
        line_height = leading(BODY_SIZE)
        lines = wrap_text(text, FONT_REGULAR, BODY_SIZE, WIDTH)
        assert measure_text_height(text, FONT_REGULAR, BODY_SIZE, WIDTH, line_height) == pytest.approx(
            len(lines) * line_height
        )

    def test_matches_block_height_of_wrapped_lines(self) -> None:
        text = "shared measurement path " * 30
        line_height = leading(BODY_SIZE)
        lines = wrap_text(text, FONT_REGULAR, BODY_SIZE, WIDTH)
        assert block_height(lines, line_height) == measure_text_height(
            text, FONT_REGULAR, BODY_SIZE, WIDTH, line_height
        )
        assert block_height([], line_height) == 0

    def test_narrower_width_is_taller(self) -> None:
        text = "measure me " * 40
        line_height = leading(BODY_SIZE)
        wide = measure_text_height(text, FONT_REGULAR, BODY_SIZE, 400, line_height)
        narrow = measure_text_height(text, FONT_REGULAR, BODY_SIZE, 150, line_height)
        assert narrow > wide
