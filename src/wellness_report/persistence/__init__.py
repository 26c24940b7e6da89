"""Pluggable report sinks."""

from __future__ import annotations

from wellness_report.persistence.factory import build_report_sink
from wellness_report.persistence.memory_sink import MemoryReportSink
from wellness_report.persistence.protocols import IReportSink
from wellness_report.persistence.supabase_sink import SupabaseReportSink

__all__ = ["IReportSink", "MemoryReportSink", "SupabaseReportSink", "build_report_sink"]
