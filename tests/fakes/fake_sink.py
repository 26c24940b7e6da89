"""Report sinks for testing."""

from __future__ import annotations

from typing import Any, Optional

from wellness_report.exceptions import PersistenceError
from wellness_report.models import ReportRecord


class FakeReportSink:
    """Records saved rows; can be told to fail on save or on list."""

    def __init__(self, *, fail_save: bool = False, fail_list: bool = False) -> None:
        self.saved: list[ReportRecord] = []
        self._fail_save = fail_save
        self._fail_list = fail_list

    def save(self, record: ReportRecord) -> Optional[dict[str, Any]]:
        if self._fail_save:
            raise RuntimeError("sink unavailable")
        self.saved.append(record)
        return {"id": len(self.saved), **record.to_row()}

    def list_reports(self) -> list[dict[str, Any]]:
        if self._fail_list:
            raise PersistenceError("sink unavailable")
        return [{"id": i + 1, **r.to_row()} for i, r in reversed(list(enumerate(self.saved)))]
