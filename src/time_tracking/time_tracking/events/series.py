from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, Optional

from ..common.datetime_utils import now_local
from ..core.constants import FUTURE_SKEW_TOLERANCE_SECONDS
from ..core.exceptions import ValidationError
from .model import ClockEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventSeries:
    """Time-ordered clock events of a single user.

    `flagged` lists events dated further in the future than the clock-skew
    tolerance allows. They stay in `events` unless the series was built with
    `reject_future=True`.
    """

    events: tuple[ClockEvent, ...] = ()
    flagged: tuple[ClockEvent, ...] = field(default=())

    @classmethod
    def build(
        cls,
        events: Iterable[ClockEvent],
        *,
        user_id: Optional[int] = None,
        now: Optional[datetime] = None,
        skew_tolerance: timedelta = timedelta(seconds=FUTURE_SKEW_TOLERANCE_SECONDS),
        reject_future: bool = False,
    ) -> "EventSeries":
        items = list(events)
        if user_id is not None:
            foreign = [e for e in items if e.user_id != user_id]
            if foreign:
                raise ValidationError(
                    f"Event {foreign[0].event_id} belongs to user {foreign[0].user_id}, expected {user_id}"
                )

        # server ids are monotonic, so they order events that share a timestamp
        ordered = sorted(items, key=lambda e: (e.timestamp, e.event_id))

        limit = (now or now_local()) + skew_tolerance
        flagged = tuple(e for e in ordered if e.timestamp > limit)
        if flagged:
            logger.warning(
                "%d clock event(s) dated after %s (first id=%s)",
                len(flagged),
                limit.isoformat(),
                flagged[0].event_id,
            )
            if reject_future:
                ordered = [e for e in ordered if e.timestamp <= limit]

        return cls(events=tuple(ordered), flagged=flagged)

    def __iter__(self) -> Iterator[ClockEvent]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    @property
    def last(self) -> Optional[ClockEvent]:
        return self.events[-1] if self.events else None

    def on_day(self, day: date) -> "EventSeries":
        return EventSeries(
            events=tuple(e for e in self.events if e.timestamp.date() == day),
            flagged=tuple(e for e in self.flagged if e.timestamp.date() == day),
        )

    def between(self, start: date, end: date) -> "EventSeries":
        """Sub-series of events whose calendar date lies in [start, end]."""
        return EventSeries(
            events=tuple(e for e in self.events if start <= e.timestamp.date() <= end),
            flagged=tuple(e for e in self.flagged if start <= e.timestamp.date() <= end),
        )
