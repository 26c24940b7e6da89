"""Shared fixtures for wellness-report tests."""

from __future__ import annotations

from datetime import datetime
from io import BytesIO

import pytest
from PIL import Image

from wellness_report.composer.composer import ReportComposer
from wellness_report.core.config import ReportConfig
from wellness_report.models import LogoImage, ReportRequest

FIXED_TIME = datetime(2024, 3, 15, 9, 30, 0)


@pytest.fixture
def generated_at() -> datetime:
    """Fixed generation time so layouts are comparable."""
    return FIXED_TIME


@pytest.fixture
def composer() -> ReportComposer:
    return ReportComposer(ReportConfig())


@pytest.fixture
def png_bytes() -> bytes:
    """A small, valid PNG (wider than tall)."""
    buffer = BytesIO()
    Image.new("RGB", (120, 60), (46, 134, 193)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def logo(png_bytes: bytes) -> LogoImage:
    return LogoImage(mime_type="image/png", data=png_bytes)


@pytest.fixture
def short_request() -> ReportRequest:
    """Two-answer submission that fits on a single page."""
    return ReportRequest(
        submitter_name="Maria Silva",
        submitter_email="maria@example.com",
        answers={"Sleep hours": "5", "Exercise": "none"},
    )


@pytest.fixture
def long_request() -> ReportRequest:
    """Fifty long answers, enough to overflow several pages."""
    answers = {
        f"Question {i:02d}: how would you describe your habits regarding topic number {i} "
        f"over the last few weeks, including weekends and holidays?": (
            f"Answer {i:02d}: " + "I usually keep a steady routine but sometimes it slips. " * 4
        ).strip()
        for i in range(50)
    }
    return ReportRequest(submitter_name="João Pereira", submitter_email=None, answers=answers)
