"""Stored report listing."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from wellness_report.api.dependencies import get_report_service
from wellness_report.services.report_service import ReportService

router = APIRouter(tags=["reports"])


@router.get("/reports")
async def list_reports(service: ReportService = Depends(get_report_service)) -> list[dict[str, Any]]:
    """All stored reports, newest first."""
    return await run_in_threadpool(service.list_reports)
