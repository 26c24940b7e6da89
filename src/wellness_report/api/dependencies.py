"""FastAPI dependencies resolving per-app singletons from ``app.state``."""

from __future__ import annotations

from fastapi import Request

from wellness_report.core.config import AppSettings
from wellness_report.services.report_service import ReportService


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_report_service(request: Request) -> ReportService:
    return request.app.state.report_service
