"""Prize request schemas.

Required fields are typed optional here so that absence is reported by the
service as a 400 with the documented message instead of a schema error.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# BIGINT range of the user_id column
USER_ID_MAX = 2**63 - 1


class PrizeCreate(BaseModel):
    """Body of ``POST /prizes``."""

    prize_id: str | None = None
    gift_name: str | None = None
    user_id: int | None = Field(default=None, ge=-USER_ID_MAX - 1, le=USER_ID_MAX)
    username: str | None = None


class PrizeStatusUpdate(BaseModel):
    """Body of ``PATCH /prizes/{prize_id}``."""

    status: str | None = None
    error_message: str | None = None
