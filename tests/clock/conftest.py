from __future__ import annotations

from datetime import date, datetime

import pytest

from src.time_tracking.time_tracking.core.enums import ClockEventType
from src.time_tracking.time_tracking.events.model import ClockEvent


class InMemoryClockEvents:
    def __init__(self):
        self._next_id = 1
        self.rows: list[ClockEvent] = []

    def list_for_user(self, user_id):
        rows = [e for e in self.rows if e.user_id == int(user_id)]
        return sorted(rows, key=lambda e: (e.timestamp, e.event_id), reverse=True)

    def list_for_user_and_day(self, user_id, day: date):
        rows = [e for e in self.rows if e.user_id == int(user_id) and e.timestamp.date() == day]
        return sorted(rows, key=lambda e: (e.timestamp, e.event_id))

    def get_latest_for_user(self, user_id):
        rows = self.list_for_user(user_id)
        return rows[0] if rows else None

    def create(self, *, user_id, event_type: ClockEventType, timestamp: datetime):
        event = ClockEvent(
            event_id=self._next_id,
            user_id=int(user_id),
            type=event_type,
            timestamp=timestamp,
            created_at=timestamp,
        )
        self._next_id += 1
        self.rows.append(event)
        return event


@pytest.fixture
def clock_repo() -> InMemoryClockEvents:
    return InMemoryClockEvents()
