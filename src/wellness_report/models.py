"""Pydantic data models for wellness-report."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

# ── Submission models ────────────────────────────────────────────────


class LogoImage(BaseModel):
    """A decoded logo image as raw bytes plus its declared MIME type."""

    model_config = ConfigDict(frozen=True)

    mime_type: str
    data: bytes

    @property
    def extension(self) -> str:
        return self.mime_type.split("/", 1)[-1]


class ReportRequest(BaseModel):
    """A validated questionnaire submission, built once per incoming call.

    ``answers`` keeps submission order; that order is the rendered order.
    """

    model_config = ConfigDict(frozen=True)

    submitter_name: str = Field(min_length=1)
    submitter_email: Optional[str] = None
    answers: dict[str, str] = Field(default_factory=dict)
    logo: Optional[LogoImage] = None


# ── Persisted record ─────────────────────────────────────────────────


class ReportRecord(BaseModel):
    """Row written to the report sink after a PDF has been delivered."""

    name: str
    email: Optional[str] = None
    answers: dict[str, str] = Field(default_factory=dict)
    analysis: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_row(self) -> dict[str, Any]:
        """Serialize to the column shape stored by the sink."""
        row = self.model_dump()
        row["created_at"] = self.created_at.isoformat()
        return row
