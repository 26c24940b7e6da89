"""Tests for the memory and Supabase report sinks."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from wellness_report.core.config import PersistenceConfig
from wellness_report.exceptions import PersistenceError
from wellness_report.models import ReportRecord
from wellness_report.persistence import (
    IReportSink,
    MemoryReportSink,
    SupabaseReportSink,
    build_report_sink,
)


def _record(name: str = "Ana", day: int = 1) -> ReportRecord:
    return ReportRecord(
        name=name,
        email="ana@example.com",
        answers={"Sono": "6h"},
        analysis="Durma mais.",
        created_at=datetime(2024, 5, day, tzinfo=timezone.utc),
    )


class TestReportRecord:
    def test_row_shape(self) -> None:
        row = _record().to_row()
        assert row == {
            "name": "Ana",
            "email": "ana@example.com",
            "answers": {"Sono": "6h"},
            "analysis": "Durma mais.",
            "created_at": "2024-05-01T00:00:00+00:00",
        }


class TestMemoryReportSink:
    def test_save_assigns_ids(self) -> None:
        sink = MemoryReportSink()
        first = sink.save(_record())
        second = sink.save(_record())
        assert (first["id"], second["id"]) == (1, 2)

    def test_list_newest_first(self) -> None:
        sink = MemoryReportSink()
        sink.save(_record("early", day=1))
        sink.save(_record("late", day=9))
        sink.save(_record("middle", day=5))
        assert [row["name"] for row in sink.list_reports()] == ["late", "middle", "early"]

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemoryReportSink(), IReportSink)


def _client_returning(data) -> MagicMock:
    client = MagicMock()
    client.table.return_value.insert.return_value.execute.return_value.data = data
    client.table.return_value.select.return_value.order.return_value.execute.return_value.data = data
    return client


class TestSupabaseReportSink:
    def test_save_inserts_row(self) -> None:
        client = _client_returning([{"id": 7, "name": "Ana"}])
        sink = SupabaseReportSink(table="reports", client=client)
        saved = sink.save(_record())
        assert saved == {"id": 7, "name": "Ana"}
        client.table.assert_called_with("reports")
        client.table.return_value.insert.assert_called_once_with([_record().to_row()])

    def test_save_failure_returns_none(self) -> None:
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.side_effect = RuntimeError("503")
        assert SupabaseReportSink(client=client).save(_record()) is None

    def test_list_orders_newest_first(self) -> None:
        client = _client_returning([{"id": 2}, {"id": 1}])
        sink = SupabaseReportSink(client=client)
        assert sink.list_reports() == [{"id": 2}, {"id": 1}]
        client.table.return_value.select.assert_called_once_with("*")
        client.table.return_value.select.return_value.order.assert_called_once_with("created_at", desc=True)

    def test_list_failure_raises(self) -> None:
        client = MagicMock()
        client.table.return_value.select.return_value.order.return_value.execute.side_effect = RuntimeError("down")
        with pytest.raises(PersistenceError, match="down"):
            SupabaseReportSink(client=client).list_reports()

    def test_unconfigured_sink_is_inert(self) -> None:
        sink = SupabaseReportSink(url="", key="")
        assert not sink.configured
        assert sink.save(_record()) is None
        with pytest.raises(PersistenceError):
            sink.list_reports()


class TestBuildReportSink:
    def test_memory_backend(self) -> None:
        assert isinstance(build_report_sink(PersistenceConfig(backend="memory")), MemoryReportSink)

    def test_supabase_backend_without_credentials(self) -> None:
        sink = build_report_sink(PersistenceConfig(backend="supabase", supabase_url="", supabase_key=""))
        assert isinstance(sink, SupabaseReportSink)
        assert not sink.configured
