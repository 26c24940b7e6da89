"""wellness-report: questionnaire analysis rendered as a paginated PDF report.

Public API::

    from wellness_report import (
        AppSettings,
        ReportRequest, LogoImage, ReportRecord,
        ReportComposer, RenderedDocument,
        AnalysisProvider, ReportService,
    )
"""

from __future__ import annotations

from wellness_report.analysis.provider import AnalysisProvider
from wellness_report.composer.composer import ReportComposer
from wellness_report.composer.layout import RenderedDocument
from wellness_report.core.config import AppSettings
from wellness_report.models import LogoImage, ReportRecord, ReportRequest
from wellness_report.services.report_service import ReportService

__all__ = [
    "AnalysisProvider",
    "AppSettings",
    "LogoImage",
    "RenderedDocument",
    "ReportComposer",
    "ReportRecord",
    "ReportRequest",
    "ReportService",
]
