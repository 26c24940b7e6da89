"""Health check endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter

router = APIRouter(tags=["health"])
api_router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe — always returns 200 if the process is up."""
    return {"status": "ok"}


@router.get("/ready")
async def ready() -> dict[str, str]:
    """Readiness probe — confirms the app can serve requests."""
    return {"status": "ready"}


@api_router.get("/health")
async def api_health() -> dict[str, Any]:
    """Public health check used by the frontend, with server time."""
    return {"ok": True, "now": datetime.now(timezone.utc).isoformat()}
