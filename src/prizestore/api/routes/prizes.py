"""Prize routes — /prizes.

Producers create prizes; the claim worker reads, updates status and
finally deletes them once claimed.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from prizestore.api.deps import get_prize_service
from prizestore.api.schemas.prizes import USER_ID_MAX, PrizeCreate, PrizeStatusUpdate
from prizestore.services.prizes import PrizeError, PrizeService

router = APIRouter(prefix="/prizes", tags=["prizes"])


@router.post("", status_code=201)
def create_prize(
    body: PrizeCreate,
    service: PrizeService = Depends(get_prize_service),
) -> dict[str, Any]:
    """Store a new prize; re-posting an existing prize_id changes nothing."""
    try:
        return service.create_prize(
            prize_id=body.prize_id,
            gift_name=body.gift_name,
            user_id=body.user_id,
            username=body.username,
        )
    except PrizeError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail) from e


@router.get("")
def list_prizes(
    user_id: int | None = Query(default=None, ge=-USER_ID_MAX - 1, le=USER_ID_MAX),
    status: str | None = None,
    service: PrizeService = Depends(get_prize_service),
) -> list[dict[str, Any]]:
    """List a user's prizes, newest first."""
    try:
        return service.list_user_prizes(user_id=user_id, status=status)
    except PrizeError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail) from e


@router.get("/{prize_id}")
def get_prize(
    prize_id: str,
    service: PrizeService = Depends(get_prize_service),
) -> dict[str, Any]:
    try:
        return service.get_prize(prize_id)
    except PrizeError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail) from e


@router.patch("/{prize_id}")
def update_prize_status(
    prize_id: str,
    body: PrizeStatusUpdate,
    service: PrizeService = Depends(get_prize_service),
) -> dict[str, Any]:
    """Set a prize's status (and error message) and return the updated row."""
    try:
        return service.update_status(prize_id, body.status, body.error_message)
    except PrizeError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail) from e


@router.delete("/{prize_id}")
def delete_prize(
    prize_id: str,
    service: PrizeService = Depends(get_prize_service),
) -> dict[str, Any]:
    """Remove a prize, but only once it is claimed."""
    try:
        return service.delete_claimed_prize(prize_id)
    except PrizeError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail) from e
