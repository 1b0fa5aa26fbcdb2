"""Prize service — validation and error mapping around the prize repository.

Status values are checked against the enum, but transitions are not:
any status may overwrite any other.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import oracledb

from prizestore.core.constants import PRIZE_STATUSES

logger = logging.getLogger(__name__)

T = TypeVar("T")

REQUIRED_CREATE_FIELDS = ("prize_id", "gift_name", "user_id")


class PrizeError(Exception):
    """Prize service error with HTTP status hint."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)


def _blank_to_none(value: str | None) -> str | None:
    return value or None


class PrizeService:
    """The six prize store operations; one repository call each, no retries."""

    def __init__(self, prize_repo: Any) -> None:
        self.prize_repo = prize_repo

    def _store_call(self, operation: str, call: Callable[[], T]) -> T:
        """Run one repository call, turning driver errors into 500s."""
        try:
            return call()
        except oracledb.Error as e:
            logger.error("%s failed: %s", operation, e)
            raise PrizeError(str(e), status_code=500) from e

    # ── create ──────────────────────────────────────────────────────

    def create_prize(
        self,
        prize_id: str | None,
        gift_name: str | None,
        user_id: int | None,
        username: str | None = None,
    ) -> dict[str, Any]:
        """Insert a pending prize; a repeated ``prize_id`` is a silent no-op."""
        if not prize_id or not gift_name or user_id is None:
            raise PrizeError(
                f"Missing required fields: {', '.join(REQUIRED_CREATE_FIELDS)}"
            )

        inserted = self._store_call(
            "Create prize",
            lambda: self.prize_repo.insert_if_absent(
                prize_id=prize_id,
                gift_name=gift_name,
                user_id=user_id,
                username=_blank_to_none(username),
            ),
        )
        if inserted:
            logger.info("Prize stored: %s | %s | user %s", prize_id, gift_name, user_id)
        else:
            logger.info("Prize already stored, left unchanged: %s", prize_id)
        return {"success": True, "prize_id": prize_id}

    # ── read ────────────────────────────────────────────────────────

    def get_prize(self, prize_id: str) -> dict[str, Any]:
        """Return one prize by id; 404 if absent."""
        prize = self._store_call("Get prize", lambda: self.prize_repo.find_by_id(prize_id))
        if prize is None:
            raise PrizeError("Prize not found", status_code=404)
        return prize

    def list_user_prizes(
        self,
        user_id: int | None,
        status: str | None = None,
    ) -> list[dict[str, Any]]:
        """Prizes for a user, newest first.

        ``status`` is an exact-match filter and is deliberately not checked
        against the enum: an unknown value just matches nothing.
        """
        if user_id is None:
            raise PrizeError("user_id query param is required")
        return self._store_call(
            "List prizes",
            lambda: self.prize_repo.find_by_user(user_id, status=status or None),
        )

    # ── update ──────────────────────────────────────────────────────

    def update_status(
        self,
        prize_id: str,
        status: str | None,
        error_message: str | None = None,
    ) -> dict[str, Any]:
        """Overwrite the status and error message; a missing message clears it."""
        if not status:
            raise PrizeError("status is required")
        if status not in PRIZE_STATUSES:
            raise PrizeError(f"Invalid status. Must be one of: {', '.join(PRIZE_STATUSES)}")

        prize = self._store_call(
            "Update prize status",
            lambda: self.prize_repo.update_status(
                prize_id, status, _blank_to_none(error_message)
            ),
        )
        if prize is None:
            raise PrizeError("Prize not found", status_code=404)

        logger.info("Prize %s status -> %s", prize_id, status)
        return prize

    # ── delete ──────────────────────────────────────────────────────

    def delete_claimed_prize(self, prize_id: str) -> dict[str, Any]:
        """Delete a prize in ``claimed`` status and return it.

        Unknown ids and prizes in any other status both yield 404.
        """
        prize = self._store_call(
            "Delete prize", lambda: self.prize_repo.delete_if_claimed(prize_id)
        )
        if prize is None:
            raise PrizeError('Prize not found or not in "claimed" status', status_code=404)

        logger.info("Prize deleted: %s", prize_id)
        return {"success": True, "deleted": prize}
