"""Hypothesis property-based tests for status validation."""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from prizestore.core.constants import PRIZE_STATUSES
from prizestore.services.prizes import PrizeError, PrizeService


class RecordingRepo:
    def __init__(self) -> None:
        self.updates: list[tuple[str, str, str | None]] = []

    def update_status(
        self, prize_id: str, status: str, error_message: str | None,
    ) -> dict[str, Any]:
        self.updates.append((prize_id, status, error_message))
        return {"prize_id": prize_id, "status": status, "error_message": error_message}


@given(status=st.text(max_size=30))
@settings(max_examples=200)
def test_only_enum_statuses_reach_the_store(status: str):
    """Any string outside the enum is rejected before the store is touched."""
    assume(status not in PRIZE_STATUSES)
    repo = RecordingRepo()
    with pytest.raises(PrizeError) as exc_info:
        PrizeService(prize_repo=repo).update_status("p1", status)
    assert exc_info.value.status_code == 400
    assert repo.updates == []


@given(
    previous=st.sampled_from(PRIZE_STATUSES),
    new=st.sampled_from(PRIZE_STATUSES),
    message=st.one_of(st.none(), st.text(max_size=50)),
)
def test_every_transition_is_accepted(previous: str, new: str, message: str | None):
    """No transition check: any enum status may follow any other."""
    repo = RecordingRepo()
    service = PrizeService(prize_repo=repo)
    service.update_status("p1", previous)
    row = service.update_status("p1", new, message)
    assert row["status"] == new
    # Blank or absent messages clear the column
    assert row["error_message"] == (message or None)
