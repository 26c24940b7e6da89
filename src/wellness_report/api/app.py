"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wellness_report.analysis.provider import AnalysisProvider
from wellness_report.api.middleware.body_limit import register_body_limit
from wellness_report.api.middleware.error_handler import register_error_handlers
from wellness_report.api.rate_limit import FixedWindowRateLimiter, enforce_rate_limit
from wellness_report.api.routes import analyze, health, reports
from wellness_report.composer.composer import ReportComposer
from wellness_report.core.config import AppSettings
from wellness_report.core.startup_checks import validate_settings
from wellness_report.logging_config import setup_logging
from wellness_report.persistence.factory import build_report_sink
from wellness_report.services.report_service import ReportService


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("wellness-report")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


def build_report_service(settings: AppSettings) -> ReportService:
    """Wire provider, composer and sink from settings."""
    return ReportService(
        provider=AnalysisProvider(settings.llm),
        composer=ReportComposer(settings.report),
        sink=build_report_sink(settings.persistence),
    )


def create_app(
    settings: AppSettings | None = None,
    *,
    service: ReportService | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    """Build the application.  Tests inject *settings* and a pre-wired *service*."""
    resolved = settings or AppSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application startup/shutdown lifecycle."""
        if configure_logging:
            setup_logging(resolved.observability)
        validate_settings(resolved)

        app.state.settings = resolved
        app.state.report_service = service or build_report_service(resolved)
        app.state.rate_limiter = FixedWindowRateLimiter(
            max_requests=resolved.api.rate_limit_max_requests,
            window_seconds=resolved.api.rate_limit_window_seconds,
        )
        yield

    app = FastAPI(
        title=resolved.api.title,
        description=resolved.api.description,
        version=_get_version(),
        lifespan=lifespan,
    )

    register_body_limit(app, resolved.api.max_body_bytes)
    # Added last so it wraps every other layer, 413s included
    app.add_middleware(
        CORSMiddleware,
        allow_origins=resolved.api.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    register_error_handlers(app)

    limited = [Depends(enforce_rate_limit)]
    app.include_router(health.router)
    app.include_router(health.api_router, prefix="/api", dependencies=limited)
    app.include_router(analyze.router, prefix="/api", dependencies=limited)
    app.include_router(reports.router, prefix="/api", dependencies=limited)
    return app


app = create_app()
