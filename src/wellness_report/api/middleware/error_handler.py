"""Global exception handlers mapping domain exceptions to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from wellness_report.exceptions import (
    PersistenceError,
    RateLimitExceeded,
    RenderError,
    ValidationError,
    WellnessReportError,
)

log = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Erro interno no servidor"
LIST_REPORTS_ERROR_MESSAGE = "Erro ao buscar relatórios"


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(RateLimitExceeded)
    async def handle_rate_limit(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        return JSONResponse(
            status_code=429,
            content={"error": str(exc)},
            headers={"Retry-After": str(int(exc.retry_after))},
        )

    @app.exception_handler(RenderError)
    async def handle_render_error(request: Request, exc: RenderError) -> JSONResponse:
        log.error("Report rendering failed: %s", exc, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
        log.error("Report sink failed: %s", exc)
        return JSONResponse(status_code=500, content={"error": LIST_REPORTS_ERROR_MESSAGE})

    @app.exception_handler(WellnessReportError)
    async def handle_generic_error(request: Request, exc: WellnessReportError) -> JSONResponse:
        log.error("Unhandled application error: %s", exc, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        log.error("Unexpected error on %s: %s", request.url.path, exc, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})
