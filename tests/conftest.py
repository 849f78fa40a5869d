from __future__ import annotations

from datetime import datetime

import pytest

from src.time_tracking.time_tracking.core.enums import ClockEventType
from src.time_tracking.time_tracking.events.model import ClockEvent


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2026, 2, 4, 11, 15, 0)


@pytest.fixture
def make_events():
    """Build ClockEvents from (type, timestamp) pairs; ids follow argument order."""

    def _make(*items, user_id: int = 1) -> list[ClockEvent]:
        return [
            ClockEvent(event_id=i, user_id=user_id, type=ClockEventType(t), timestamp=ts)
            for i, (t, ts) in enumerate(items, start=1)
        ]

    return _make
