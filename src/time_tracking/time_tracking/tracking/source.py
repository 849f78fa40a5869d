from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ClockEventType
from ..events.model import ClockEvent


class ClockEventSource(Protocol):
    """Read/mutate access to the authenticated user's clock events."""

    async def get_status(self) -> ClockEventType:
        raise NotImplementedError

    async def get_day_events(self, day: Optional[date] = None) -> Sequence[ClockEvent]:
        raise NotImplementedError

    async def get_events(self) -> Sequence[ClockEvent]:
        raise NotImplementedError

    async def clock(self, event_type: ClockEventType) -> ClockEvent:
        raise NotImplementedError
