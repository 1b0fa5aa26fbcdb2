"""Health check routes."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from prizestore.core.constants import SERVICE_NAME
from prizestore.core.database import fetch_db_time

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=None)
def service_status(request: Request) -> dict[str, Any] | JSONResponse:
    """Confirm the store is reachable and report its clock.

    Returns 503 instead of failing when the store is down.
    """
    db_pool = getattr(request.app.state, "db_pool", None)
    try:
        if db_pool is None:
            raise RuntimeError("Database pool not initialized")
        db_time = fetch_db_time(db_pool)
    except Exception as exc:
        logger.warning("Health check failed: %s", exc)
        return JSONResponse(
            status_code=503,
            content={"status": "error", "message": str(exc)},
        )

    return {"status": "online", "service": SERVICE_NAME, "db_time": db_time}


@router.get("/health/live")
def liveness_probe() -> dict[str, Any]:
    """Is the process alive and responding? Does not touch the store."""
    return {"status": "alive"}
