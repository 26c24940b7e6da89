"""In-memory report sink for tests and single-process local runs."""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Any, Optional

from wellness_report.models import ReportRecord

log = logging.getLogger(__name__)


class MemoryReportSink:
    """Keeps rows in a plain list; nothing leaves the process."""

    def __init__(self) -> None:
        self._rows: list[dict[str, Any]] = []
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def save(self, record: ReportRecord) -> Optional[dict[str, Any]]:
        with self._lock:
            row = {"id": next(self._ids), **record.to_row()}
            self._rows.append(row)
        log.debug("Saved report %s to memory sink", row["id"])
        return row

    def list_reports(self) -> list[dict[str, Any]]:
        with self._lock:
            rows = list(self._rows)
        return sorted(rows, key=lambda row: (row["created_at"], row["id"]), reverse=True)
