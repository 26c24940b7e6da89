"""Report sink protocol shared by every storage backend."""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from wellness_report.models import ReportRecord


@runtime_checkable
class IReportSink(Protocol):
    """Protocol for report sinks (Supabase, memory, etc.)."""

    def save(self, record: ReportRecord) -> Optional[dict[str, Any]]:
        """Store *record*; return the stored row, or None on failure. Never raises."""
        ...

    def list_reports(self) -> list[dict[str, Any]]:
        """Return stored rows, newest first. Raises ``PersistenceError`` on failure."""
        ...
