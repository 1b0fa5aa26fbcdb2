"""Schema setup for the prize store.

Safe to run on every startup: existing tables and indexes are left alone.
"""

from __future__ import annotations

import logging
from typing import Any

import oracledb

logger = logging.getLogger(__name__)


MIGRATION_001_PRIZES = """
CREATE TABLE prizes (
    prize_id            VARCHAR2(1000 CHAR) PRIMARY KEY,
    gift_name           VARCHAR2(1000 CHAR) NOT NULL,
    user_id             NUMBER(19) NOT NULL,
    username            VARCHAR2(1000 CHAR),
    status              VARCHAR2(20) DEFAULT 'pending' NOT NULL
                        CHECK (status IN ('pending','claiming','claimed','failed')),
    created_at          TIMESTAMP WITH TIME ZONE DEFAULT SYSTIMESTAMP NOT NULL,
    updated_at          TIMESTAMP WITH TIME ZONE DEFAULT SYSTIMESTAMP NOT NULL,
    error_message       VARCHAR2(4000 CHAR)
)
"""

MIGRATION_002_INDEXES = [
    "CREATE INDEX idx_prizes_user_id ON prizes(user_id)",
    "CREATE INDEX idx_prizes_status ON prizes(status)",
]

ALL_TABLE_DDLS = [
    ("prizes", MIGRATION_001_PRIZES),
]

# ORA-00955: name already used; ORA-01408: column list already indexed
_INDEX_EXISTS_CODES = (955, 1408)


def _error_code(exc: oracledb.DatabaseError) -> int | None:
    error_obj: Any = exc.args[0] if exc.args else None
    return getattr(error_obj, "code", None)


def table_exists(conn: oracledb.Connection, table_name: str) -> bool:
    """Check if a table exists in the current schema."""
    with conn.cursor() as cur:
        cur.execute(
            "SELECT COUNT(*) FROM user_tables WHERE table_name = :name",
            {"name": table_name.upper()},
        )
        row = cur.fetchone()
        return bool(row and row[0] > 0)


def run_migrations(conn: oracledb.Connection) -> list[str]:
    """Create whatever part of the schema is missing. Returns actions taken."""
    actions: list[str] = []

    for table_name, ddl in ALL_TABLE_DDLS:
        if not table_exists(conn, table_name):
            with conn.cursor() as cur:
                cur.execute(ddl)
            actions.append(f"Created table: {table_name}")
            logger.info("Created table: %s", table_name)

    for idx_sql in MIGRATION_002_INDEXES:
        idx_name = idx_sql.split("INDEX ")[1].split(" ON")[0]
        try:
            with conn.cursor() as cur:
                cur.execute(idx_sql)
        except oracledb.DatabaseError as e:
            if _error_code(e) in _INDEX_EXISTS_CODES:
                continue
            raise
        actions.append(f"Created index: {idx_name}")
        logger.info("Created index: %s", idx_name)

    conn.commit()
    return actions


def init_schema(pool: oracledb.ConnectionPool) -> list[str]:
    """Run migrations on a pooled connection."""
    conn = pool.acquire()
    try:
        actions = run_migrations(conn)
    finally:
        conn.close()
    if actions:
        logger.info("Migrations applied: %s", actions)
    else:
        logger.info("Database table ready (no pending migrations)")
    return actions
