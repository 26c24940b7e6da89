"""Startup validation: surface misconfigurations before the first request."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wellness_report.core.config import AppSettings

log = logging.getLogger(__name__)


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_llm(settings)
    _check_persistence(settings)
    _check_rate_limit(settings)


def _check_llm(settings: AppSettings) -> None:
    """Warn when the analysis provider will answer with demo text."""
    if not settings.llm.api_key:
        log.warning(
            "No LLM API key configured (WELLNESS_LLM_API_KEY / OPENAI_API_KEY). "
            "Reports will carry the demo analysis text."
        )


def _check_persistence(settings: AppSettings) -> None:
    """Warn when the Supabase sink cannot store anything."""
    if settings.persistence.backend == "supabase" and not settings.persistence.supabase_configured:
        log.warning(
            "SUPABASE_URL / SUPABASE_KEY not set. Reports will not be persisted "
            "and GET /api/reports will fail."
        )
    if settings.persistence.backend == "memory":
        log.warning("Persistence backend is 'memory'. Stored reports are lost on restart.")


def _check_rate_limit(settings: AppSettings) -> None:
    """Reject a rate limit that would refuse every request."""
    if settings.api.rate_limit_max_requests < 1:
        raise ValueError("WELLNESS_API_RATE_LIMIT_MAX_REQUESTS must be at least 1.")
