from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ClockEventType
from ..events.model import ClockEvent


class ClockEventRepository(Protocol):
    def list_for_user(self, user_id: int) -> Sequence[ClockEvent]:
        """All events of a user, newest first."""

        raise NotImplementedError

    def list_for_user_and_day(self, user_id: int, day: date) -> Sequence[ClockEvent]:
        """Events of one calendar day, oldest first."""

        raise NotImplementedError

    def get_latest_for_user(self, user_id: int) -> Optional[ClockEvent]:
        raise NotImplementedError

    def create(self, *, user_id: int, event_type: ClockEventType, timestamp: datetime) -> ClockEvent:
        raise NotImplementedError
