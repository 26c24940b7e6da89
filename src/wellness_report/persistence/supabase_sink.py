"""Supabase report sink — rows in a Postgres table behind the Supabase REST API."""

from __future__ import annotations

import logging
from typing import Any, Optional

from supabase import Client, create_client

from wellness_report.exceptions import PersistenceError
from wellness_report.models import ReportRecord

log = logging.getLogger(__name__)


class SupabaseReportSink:
    """Stores report records in the ``reports`` table.

    When URL or key are missing the sink stays inert: ``save`` returns None
    and ``list_reports`` raises ``PersistenceError``.
    """

    def __init__(
        self,
        url: str = "",
        key: str = "",
        table: str = "reports",
        client: Client | None = None,
    ) -> None:
        self._table = table
        if client is not None:
            self._client: Client | None = client
        elif url and key:
            self._client = create_client(url, key)
        else:
            self._client = None

    @property
    def configured(self) -> bool:
        return self._client is not None

    def save(self, record: ReportRecord) -> Optional[dict[str, Any]]:
        if self._client is None:
            log.debug("Supabase not configured, report not persisted")
            return None
        try:
            response = self._client.table(self._table).insert([record.to_row()]).execute()
        except Exception as exc:
            log.error("Supabase insert into %s failed: %s", self._table, exc)
            return None

        rows = response.data or []
        saved = rows[0] if rows else None
        if saved is not None:
            log.info("Saved report to Supabase", extra={"report_id": saved.get("id")})
        return saved

    def list_reports(self) -> list[dict[str, Any]]:
        if self._client is None:
            raise PersistenceError("Supabase is not configured (SUPABASE_URL / SUPABASE_KEY)")
        try:
            response = (
                self._client.table(self._table)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as exc:
            raise PersistenceError(f"Supabase select from {self._table} failed: {exc}") from exc
        return list(response.data or [])
