"""Oracle connection pool management."""

from __future__ import annotations

import logging
from datetime import datetime

import oracledb

from prizestore.core.config import Settings

logger = logging.getLogger(__name__)

# Module-level pool reference
_pool: oracledb.ConnectionPool | None = None


def init_pool(settings: Settings) -> oracledb.ConnectionPool:
    """Create the process-wide connection pool, or return the existing one.

    Raises ``oracledb.Error`` if the store cannot be reached.
    """
    global _pool
    if _pool is not None:
        return _pool

    logger.info("Creating Oracle connection pool: %s", settings.oracle_dsn)
    _pool = oracledb.create_pool(
        user=settings.oracle_user,
        password=settings.oracle_password,
        dsn=settings.oracle_dsn,
        min=settings.oracle_pool_min,
        max=settings.oracle_pool_max,
        increment=settings.oracle_pool_increment,
    )
    logger.info(
        "Oracle connection pool created (min=%d, max=%d)",
        settings.oracle_pool_min,
        settings.oracle_pool_max,
    )
    return _pool


def close_pool() -> None:
    """Close the pool if one was created."""
    global _pool
    if _pool is not None:
        _pool.close(force=True)
        _pool = None
        logger.info("Oracle connection pool closed")


def fetch_db_time(pool: oracledb.ConnectionPool) -> datetime:
    """Round-trip to the store and return its current time."""
    conn = pool.acquire()
    try:
        with conn.cursor() as cur:
            cur.execute("SELECT SYSTIMESTAMP AS db_time FROM DUAL")
            row = cur.fetchone()
            if row is None:
                raise RuntimeError("Database returned no time")
            return row[0]
    finally:
        conn.close()
