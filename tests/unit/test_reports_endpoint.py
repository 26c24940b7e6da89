"""Tests for GET /api/reports and the health endpoints."""

from __future__ import annotations

from datetime import datetime

from fastapi.testclient import TestClient

from tests.fakes.fake_analysis import FakeAnalysisProvider
from tests.fakes.fake_sink import FakeReportSink
from wellness_report.api.app import create_app
from wellness_report.composer.composer import ReportComposer
from wellness_report.core.config import AppSettings, PersistenceConfig
from wellness_report.models import ReportRecord
from wellness_report.persistence.memory_sink import MemoryReportSink
from wellness_report.services.report_service import ReportService


def _build_client(sink) -> TestClient:
    settings = AppSettings(persistence=PersistenceConfig(backend="memory"))
    service = ReportService(FakeAnalysisProvider(), ReportComposer(), sink)
    return TestClient(create_app(settings, service=service, configure_logging=False))


class TestListReports:
    def test_empty(self) -> None:
        with _build_client(MemoryReportSink()) as client:
            resp = client.get("/api/reports")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_newest_first(self) -> None:
        sink = MemoryReportSink()
        sink.save(ReportRecord(name="Old", analysis="a", created_at=datetime(2024, 1, 1)))
        sink.save(ReportRecord(name="New", analysis="b", created_at=datetime(2024, 6, 1)))
        with _build_client(sink) as client:
            body = client.get("/api/reports").json()
        assert [row["name"] for row in body] == ["New", "Old"]
        assert set(body[0]) >= {"id", "name", "email", "answers", "analysis", "created_at"}

    def test_generated_report_is_listed(self) -> None:
        with _build_client(MemoryReportSink()) as client:
            client.post("/api/analyze", json={"name": "Ana", "responses": {"q": "a"}})
            body = client.get("/api/reports").json()
        assert [row["name"] for row in body] == ["Ana"]
        assert body[0]["answers"] == {"q": "a"}

    def test_sink_failure_is_500(self) -> None:
        with _build_client(FakeReportSink(fail_list=True)) as client:
            resp = client.get("/api/reports")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Erro ao buscar relatórios"}


class TestHealth:
    def test_api_health(self) -> None:
        with _build_client(MemoryReportSink()) as client:
            body = client.get("/api/health").json()
        assert body["ok"] is True
        datetime.fromisoformat(body["now"])

    def test_liveness_and_readiness(self) -> None:
        with _build_client(MemoryReportSink()) as client:
            assert client.get("/health").json() == {"status": "ok"}
            assert client.get("/ready").json() == {"status": "ready"}
