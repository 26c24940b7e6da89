"""Build the configured report sink."""

from __future__ import annotations

from wellness_report.core.config import PersistenceConfig
from wellness_report.persistence.memory_sink import MemoryReportSink
from wellness_report.persistence.protocols import IReportSink
from wellness_report.persistence.supabase_sink import SupabaseReportSink


def build_report_sink(config: PersistenceConfig) -> IReportSink:
    if config.backend == "memory":
        return MemoryReportSink()
    return SupabaseReportSink(
        url=config.supabase_url,
        key=config.supabase_key,
        table=config.table,
    )
