"""Application services."""

from __future__ import annotations

from wellness_report.services.report_service import (
    GeneratedReport,
    ReportService,
    build_report_request,
    content_disposition,
    parse_logo_data_url,
    report_filename,
)

__all__ = [
    "GeneratedReport",
    "ReportService",
    "build_report_request",
    "content_disposition",
    "parse_logo_data_url",
    "report_filename",
]
