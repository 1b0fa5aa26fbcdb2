"""Dependency injection for FastAPI routes."""

from __future__ import annotations

from typing import Any

from fastapi import Depends, HTTPException, Request

from prizestore.repositories.prize_repository import PrizeRepository
from prizestore.services.prizes import PrizeService


def get_db_pool(request: Request) -> Any:
    """The process-wide connection pool created in the app lifespan."""
    pool = getattr(request.app.state, "db_pool", None)
    if pool is None:
        raise HTTPException(status_code=500, detail="Database pool not initialized")
    return pool


def get_prize_service(pool: Any = Depends(get_db_pool)) -> PrizeService:
    return PrizeService(prize_repo=PrizeRepository(pool=pool))
