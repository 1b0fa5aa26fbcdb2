"""Tests for the prize repository SQL."""

from __future__ import annotations

from datetime import UTC, datetime
from types import SimpleNamespace

import oracledb
import pytest

from prizestore.core.constants import PRIZE_COLUMNS
from prizestore.repositories.prize_repository import PrizeRepository
from tests.conftest import MockCursor, MockPool, set_mock_prize_rows, set_mock_returning
from tests.factories.data_factories import build_prize


@pytest.fixture
def repo(mock_pool: MockPool) -> PrizeRepository:
    return PrizeRepository(pool=mock_pool)


class TestInsertIfAbsent:
    def test_uses_single_merge_statement(self, repo: PrizeRepository, mock_cursor: MockCursor) -> None:
        mock_cursor.rowcount = 1

        inserted = repo.insert_if_absent("p1", "Rose", 42, "alice")

        assert inserted is True
        assert len(mock_cursor._execute_log) == 1
        sql, params = mock_cursor._execute_log[0]
        assert sql.startswith("MERGE INTO prizes")
        assert "WHEN NOT MATCHED THEN INSERT" in sql
        assert "WHEN MATCHED" not in sql
        assert params == {
            "prize_id": "p1",
            "gift_name": "Rose",
            "user_id": 42,
            "username": "alice",
            "status": "pending",
        }

    def test_existing_id_reports_not_inserted(
        self, repo: PrizeRepository, mock_cursor: MockCursor,
    ) -> None:
        mock_cursor.rowcount = 0
        assert repo.insert_if_absent("p1", "Tulip", 42, None) is False

    def test_concurrent_unique_violation_is_ignored(
        self, repo: PrizeRepository, mock_cursor: MockCursor,
    ) -> None:
        mock_cursor._raise_on_execute = oracledb.IntegrityError(
            SimpleNamespace(code=1, message="ORA-00001: unique constraint violated")
        )
        assert repo.insert_if_absent("p1", "Rose", 42, None) is False

    def test_other_integrity_errors_propagate(
        self, repo: PrizeRepository, mock_cursor: MockCursor,
    ) -> None:
        mock_cursor._raise_on_execute = oracledb.IntegrityError(
            SimpleNamespace(code=2290, message="ORA-02290: check constraint violated")
        )
        with pytest.raises(oracledb.IntegrityError):
            repo.insert_if_absent("p1", "Rose", 42, None)


class TestFindByUser:
    def test_orders_newest_first(self, repo: PrizeRepository, mock_cursor: MockCursor) -> None:
        set_mock_prize_rows(mock_cursor, [build_prize(user_id=42)])

        rows = repo.find_by_user(42)

        assert len(rows) == 1
        sql, params = mock_cursor._execute_log[-1]
        assert "WHERE user_id = :w_user_id" in sql
        assert params == {"w_user_id": 42}
        assert sql.endswith("ORDER BY created_at DESC")

    def test_status_filter_added(self, repo: PrizeRepository, mock_cursor: MockCursor) -> None:
        set_mock_prize_rows(mock_cursor, [])

        repo.find_by_user(42, status="claimed")

        sql, params = mock_cursor._execute_log[-1]
        assert "user_id = :w_user_id AND status = :w_status" in sql
        assert params == {"w_user_id": 42, "w_status": "claimed"}

    def test_rows_keyed_by_lower_case_column(
        self, repo: PrizeRepository, mock_cursor: MockCursor,
    ) -> None:
        prize = build_prize(prize_id="p1", user_id=42)
        set_mock_prize_rows(mock_cursor, [prize])
        assert repo.find_by_user(42) == [prize]


class TestUpdateStatus:
    def test_touches_updated_at_and_returns_row(
        self, repo: PrizeRepository, mock_cursor: MockCursor,
    ) -> None:
        prize = build_prize(prize_id="p1", status="claiming")
        set_mock_returning(mock_cursor, prize)

        row = repo.update_status("p1", "claiming", None)

        assert row == prize
        sql, params = mock_cursor._execute_log[-1]
        assert "updated_at = SYSTIMESTAMP" in sql
        assert "error_message = :error_message" in sql
        assert f"RETURNING {', '.join(PRIZE_COLUMNS)} INTO" in sql
        assert params["status"] == "claiming"
        assert params["error_message"] is None
        assert params["id"] == "p1"

    def test_returning_binds_are_typed(self, repo: PrizeRepository, mock_cursor: MockCursor) -> None:
        set_mock_returning(mock_cursor, build_prize())
        repo.update_status("p1", "failed", "out of stock")
        _, params = mock_cursor._execute_log[-1]
        assert params["out_user_id"].type_ is int
        assert params["out_created_at"].type_ is oracledb.DB_TYPE_TIMESTAMP_TZ
        assert params["out_gift_name"].type_ is str

    def test_missing_row_returns_none(self, repo: PrizeRepository, mock_cursor: MockCursor) -> None:
        set_mock_returning(mock_cursor, None)
        assert repo.update_status("missing-id", "claimed", None) is None


class TestDeleteIfClaimed:
    def test_conditional_delete_in_one_statement(
        self, repo: PrizeRepository, mock_cursor: MockCursor,
    ) -> None:
        prize = build_prize(prize_id="p1", status="claimed", updated_at=datetime.now(UTC))
        set_mock_returning(mock_cursor, prize)

        row = repo.delete_if_claimed("p1")

        assert row == prize
        assert len(mock_cursor._execute_log) == 1
        sql, params = mock_cursor._execute_log[0]
        assert sql.startswith("DELETE FROM prizes")
        assert "WHERE prize_id = :id AND status = :status" in sql
        assert params["status"] == "claimed"

    def test_not_claimed_returns_none(self, repo: PrizeRepository, mock_cursor: MockCursor) -> None:
        set_mock_returning(mock_cursor, None)
        assert repo.delete_if_claimed("p1") is None
