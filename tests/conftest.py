"""Shared pytest fixtures and test configuration."""

from __future__ import annotations

import os
import sys
from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

# Ensure src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from prizestore.core.constants import PRIZE_COLUMNS  # noqa: E402


class MockCursor:
    """Mock Oracle cursor supporting context manager, out-binds and failures."""

    def __init__(self) -> None:
        self.description: list[tuple[str, ...]] | None = None
        self._rows: list[tuple[Any, ...]] = []
        self._execute_log: list[tuple[str, dict[str, Any] | None]] = []
        self.rowcount: int = 0
        self._var_values: list[Any] = []
        self._vars: list[MagicMock] = []
        self._raise_on_execute: Exception | None = None

    def execute(self, sql: str, params: dict[str, Any] | None = None) -> None:
        self._execute_log.append((sql, params))
        self._vars = []
        if self._raise_on_execute is not None:
            raise self._raise_on_execute

    def fetchall(self) -> list[tuple[Any, ...]]:
        return self._rows

    def fetchone(self) -> tuple[Any, ...] | None:
        return self._rows[0] if self._rows else None

    def var(self, type_: Any) -> MagicMock:
        # DML RETURNING out-binds: the n-th var created gets the n-th value
        index = len(self._vars)
        mock_var = MagicMock()
        mock_var.type_ = type_
        if index < len(self._var_values):
            mock_var.getvalue.return_value = [self._var_values[index]]
        else:
            mock_var.getvalue.return_value = []
        self._vars.append(mock_var)
        return mock_var

    def __enter__(self) -> MockCursor:
        return self

    def __exit__(self, *args: Any) -> None:
        pass


class MockConnection:
    """Mock Oracle connection supporting context manager."""

    def __init__(self) -> None:
        self._cursor = MockCursor()
        self._committed = False
        self._closed = False

    def cursor(self) -> MockCursor:
        return self._cursor

    def commit(self) -> None:
        self._committed = True

    def close(self) -> None:
        self._closed = True

    def __enter__(self) -> MockConnection:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class MockPool:
    """Mock Oracle connection pool."""

    def __init__(self) -> None:
        self._connection = MockConnection()
        self.acquire_count = 0

    def acquire(self) -> MockConnection:
        self.acquire_count += 1
        return self._connection

    def close(self, force: bool = False) -> None:
        pass


@pytest.fixture
def mock_pool() -> MockPool:
    """Provide a mock Oracle connection pool."""
    return MockPool()


@pytest.fixture
def mock_connection(mock_pool: MockPool) -> MockConnection:
    """Provide a mock Oracle connection."""
    return mock_pool._connection


@pytest.fixture
def mock_cursor(mock_connection: MockConnection) -> MockCursor:
    """Provide a mock Oracle cursor."""
    return mock_connection._cursor


@pytest.fixture
def app(mock_pool: MockPool):  # type: ignore[no-untyped-def]
    """Create a FastAPI test app wired to the mock pool."""
    from prizestore.core.config import Settings
    from prizestore.main import create_app

    settings = Settings(app_env="testing", _env_file=None)
    application = create_app(settings=settings)
    application.state.db_pool = mock_pool
    return application


@pytest.fixture
def client(app):  # type: ignore[no-untyped-def]
    """Create a test client."""
    return TestClient(app)


# ── Helpers for setting up mock query results ────────────────────────


def set_mock_query_result(
    cursor: MockCursor,
    columns: list[str],
    rows: list[tuple[Any, ...]],
) -> None:
    """Configure mock cursor to return specific query results."""
    cursor.description = [(col.upper(),) for col in columns]
    cursor._rows = rows
    cursor.rowcount = len(rows)


def set_mock_prize_rows(cursor: MockCursor, prizes: list[dict[str, Any]]) -> None:
    """Serve full prize rows from the next SELECT."""
    set_mock_query_result(
        cursor,
        PRIZE_COLUMNS,
        [tuple(p.get(col) for col in PRIZE_COLUMNS) for p in prizes],
    )


def set_mock_returning(cursor: MockCursor, prize: dict[str, Any] | None) -> None:
    """Serve a DML RETURNING row, or report zero affected rows for ``None``."""
    if prize is None:
        cursor._var_values = []
        cursor.rowcount = 0
        return
    cursor._var_values = [prize.get(col) for col in PRIZE_COLUMNS]
    cursor.rowcount = 1
