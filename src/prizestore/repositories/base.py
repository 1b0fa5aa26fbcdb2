"""Base repository: statement execution and row mapping for Oracle tables."""

from __future__ import annotations

import logging
import time
from typing import Any

logger = logging.getLogger(__name__)

SLOW_QUERY_THRESHOLD_MS = 100  # Log queries slower than this


class BaseRepository:
    """Shared plumbing for table repositories using python-oracledb.

    Every public method acquires one pooled connection, runs exactly one
    statement and releases the connection, committing writes before return.
    Subclasses configure ``table_name``, ``id_column`` and ``columns``.
    """

    def __init__(
        self,
        pool: Any,
        table_name: str,
        id_column: str,
        columns: list[str],
    ) -> None:
        self.pool = pool
        self.table_name = table_name
        self.id_column = id_column
        self.columns = columns

    # ── helpers ──────────────────────────────────────────────────────

    def _acquire(self) -> Any:
        """Acquire a connection from the pool."""
        return self.pool.acquire()

    @staticmethod
    def _log_query(sql: str, elapsed_ms: float) -> None:
        """Log query timing; warn if above slow-query threshold."""
        if elapsed_ms > SLOW_QUERY_THRESHOLD_MS:
            logger.warning("SLOW QUERY (%.1fms): %s", elapsed_ms, sql[:200])
        else:
            logger.debug("Query (%.1fms): %s", elapsed_ms, sql[:200])

    def _build_where(
        self,
        filters: dict[str, Any],
        prefix: str = "w_",
    ) -> tuple[str, dict[str, Any]]:
        """Build a WHERE clause and bind-param dict from *filters*.

        Returns ("WHERE col1 = :w_col1 AND col2 = :w_col2", {"w_col1": v1, ...}).
        """
        if not filters:
            return "", {}
        clauses: list[str] = []
        params: dict[str, Any] = {}
        for col, val in filters.items():
            bind_name = f"{prefix}{col}"
            clauses.append(f"{col} = :{bind_name}")
            params[bind_name] = val
        return "WHERE " + " AND ".join(clauses), params

    @property
    def _select_list(self) -> str:
        return ", ".join(self.columns)

    def _returning_clause(self) -> str:
        """``RETURNING col, ... INTO :out_col, ...`` for every column."""
        targets = ", ".join(f":out_{col}" for col in self.columns)
        return f"RETURNING {self._select_list} INTO {targets}"

    def _returning_type(self, column: str) -> Any:
        """Bind type for a RETURNING out-variable; override per column."""
        return str

    # ── read ─────────────────────────────────────────────────────────

    def _fetch_rows(self, sql: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        conn = self._acquire()
        try:
            with conn.cursor() as cur:
                start = time.perf_counter()
                cur.execute(sql, params)
                columns = [col[0].lower() for col in (cur.description or [])]
                rows = [dict(zip(columns, row, strict=True)) for row in cur.fetchall()]
                self._log_query(sql, (time.perf_counter() - start) * 1000)
                return rows
        finally:
            conn.close()

    def find_by_id(self, entity_id: str) -> dict[str, Any] | None:
        """Return a single row by primary key, or ``None``."""
        conn = self._acquire()
        try:
            with conn.cursor() as cur:
                sql = (
                    f"SELECT {self._select_list} FROM {self.table_name} "
                    f"WHERE {self.id_column} = :id"
                )
                start = time.perf_counter()
                cur.execute(sql, {"id": entity_id})
                columns = [col[0].lower() for col in (cur.description or [])]
                row = cur.fetchone()
                self._log_query(sql, (time.perf_counter() - start) * 1000)
                if row is None:
                    return None
                return dict(zip(columns, row, strict=True))
        finally:
            conn.close()

    def find_where(
        self,
        filters: dict[str, Any],
        order_by: str | None = None,
    ) -> list[dict[str, Any]]:
        """Return all rows matching every filter, optionally ordered."""
        where_clause, params = self._build_where(filters)
        sql = f"SELECT {self._select_list} FROM {self.table_name} {where_clause}"
        if order_by:
            sql += f" ORDER BY {order_by}"
        return self._fetch_rows(sql, params)

    # ── write ────────────────────────────────────────────────────────

    def execute_dml(self, sql: str, params: dict[str, Any]) -> int:
        """Run one INSERT/UPDATE/DELETE/MERGE, commit, return rows affected."""
        conn = self._acquire()
        try:
            with conn.cursor() as cur:
                start = time.perf_counter()
                cur.execute(sql, params)
                conn.commit()
                self._log_query(sql, (time.perf_counter() - start) * 1000)
                return int(cur.rowcount)
        finally:
            conn.close()

    def execute_dml_returning(
        self,
        sql: str,
        params: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Run one DML statement ending in ``_returning_clause()``.

        Returns the affected row as a dict, or ``None`` if no row matched.
        """
        conn = self._acquire()
        try:
            with conn.cursor() as cur:
                out_vars: dict[str, Any] = {}
                bind_params = dict(params)
                for col in self.columns:
                    var = cur.var(self._returning_type(col))
                    bind_params[f"out_{col}"] = var
                    out_vars[col] = var

                start = time.perf_counter()
                cur.execute(sql, bind_params)
                conn.commit()
                self._log_query(sql, (time.perf_counter() - start) * 1000)

                if int(cur.rowcount) == 0:
                    return None
                result: dict[str, Any] = {}
                for col, var in out_vars.items():
                    val = var.getvalue()
                    result[col] = val[0] if isinstance(val, list) and val else val
                return result
        finally:
            conn.close()
