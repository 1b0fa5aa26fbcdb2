"""Prize repository — data access for the ``prizes`` table."""

from __future__ import annotations

from typing import Any

import oracledb

from prizestore.core.constants import (
    DELETABLE_STATUS,
    PRIZE_COLUMNS,
    PRIZE_STATUS_PENDING,
    PRIZES_TABLE,
)
from prizestore.repositories.base import BaseRepository

_TIMESTAMP_COLUMNS = ("created_at", "updated_at")

# ORA-00001: unique constraint violated
_UNIQUE_VIOLATION = 1


class PrizeRepository(BaseRepository):
    """Single-statement operations on prizes."""

    def __init__(self, pool: Any) -> None:
        super().__init__(
            pool=pool,
            table_name=PRIZES_TABLE,
            id_column="prize_id",
            columns=PRIZE_COLUMNS,
        )

    def _returning_type(self, column: str) -> Any:
        if column == "user_id":
            return int
        if column in _TIMESTAMP_COLUMNS:
            return oracledb.DB_TYPE_TIMESTAMP_TZ
        return str

    def insert_if_absent(
        self,
        prize_id: str,
        gift_name: str,
        user_id: int,
        username: str | None,
    ) -> bool:
        """Insert a pending prize unless the id already exists.

        Returns ``True`` if a row was inserted, ``False`` if it already existed.
        """
        sql = (
            f"MERGE INTO {self.table_name} p "
            "USING (SELECT :prize_id AS prize_id FROM DUAL) src "
            "ON (p.prize_id = src.prize_id) "
            "WHEN NOT MATCHED THEN INSERT "
            "(prize_id, gift_name, user_id, username, status) "
            "VALUES (src.prize_id, :gift_name, :user_id, :username, :status)"
        )
        params = {
            "prize_id": prize_id,
            "gift_name": gift_name,
            "user_id": user_id,
            "username": username,
            "status": PRIZE_STATUS_PENDING,
        }
        try:
            affected = self.execute_dml(sql, params)
        except oracledb.IntegrityError as e:
            # A concurrent MERGE for the same id inserted first
            error_obj: Any = e.args[0] if e.args else None
            if getattr(error_obj, "code", None) == _UNIQUE_VIOLATION:
                return False
            raise
        return affected > 0

    def find_by_user(self, user_id: int, status: str | None = None) -> list[dict[str, Any]]:
        """All prizes for a user, newest first, optionally with one status."""
        filters: dict[str, Any] = {"user_id": user_id}
        if status:
            filters["status"] = status
        return self.find_where(filters, order_by="created_at DESC")

    def update_status(
        self,
        prize_id: str,
        status: str,
        error_message: str | None,
    ) -> dict[str, Any] | None:
        """Set status and error message, touch ``updated_at``; return the row."""
        sql = (
            f"UPDATE {self.table_name} "
            "SET status = :status, error_message = :error_message, "
            "updated_at = SYSTIMESTAMP "
            f"WHERE {self.id_column} = :id "
            f"{self._returning_clause()}"
        )
        return self.execute_dml_returning(
            sql,
            {"status": status, "error_message": error_message, "id": prize_id},
        )

    def delete_if_claimed(self, prize_id: str) -> dict[str, Any] | None:
        """Delete the prize only if it is claimed; return the deleted row."""
        sql = (
            f"DELETE FROM {self.table_name} "
            f"WHERE {self.id_column} = :id AND status = :status "
            f"{self._returning_clause()}"
        )
        return self.execute_dml_returning(sql, {"id": prize_id, "status": DELETABLE_STATUS})
