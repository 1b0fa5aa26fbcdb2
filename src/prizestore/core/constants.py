"""Domain constants for the prize store."""

from __future__ import annotations

SERVICE_NAME = "prize-store"

# ── Prize lifecycle ─────────────────────────────────────────────────
# Intended order is pending → claiming → claimed | failed, but any status
# may be written over any other.
PRIZE_STATUS_PENDING = "pending"
PRIZE_STATUS_CLAIMING = "claiming"
PRIZE_STATUS_CLAIMED = "claimed"
PRIZE_STATUS_FAILED = "failed"

PRIZE_STATUSES: list[str] = [
    PRIZE_STATUS_PENDING,
    PRIZE_STATUS_CLAIMING,
    PRIZE_STATUS_CLAIMED,
    PRIZE_STATUS_FAILED,
]

# Only rows in this status may be deleted
DELETABLE_STATUS = PRIZE_STATUS_CLAIMED

# ── Storage ─────────────────────────────────────────────────────────
PRIZES_TABLE = "prizes"

PRIZE_COLUMNS: list[str] = [
    "prize_id",
    "gift_name",
    "user_id",
    "username",
    "status",
    "created_at",
    "updated_at",
    "error_message",
]

DEFAULT_PORT = 3002
