from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..common.datetime_utils import whole_minutes
from ..core.enums import SkipReason
from ..events.model import ClockEvent


@dataclass(frozen=True)
class WorkSession:
    """Derived interval between an IN and its OUT (or an IN still open)."""

    start: datetime
    end: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.end is None

    @property
    def day_key(self) -> date:
        # Sessions are never split across midnight.
        return self.start.date()

    def duration_minutes(self, now: Optional[datetime] = None) -> int:
        """Whole minutes worked, clamped at zero.

        An open session is measured up to `now`, which is then required.
        """
        if self.end is not None:
            return whole_minutes(self.start, self.end)
        if now is None:
            raise ValueError("now is required to measure an open session")
        return whole_minutes(self.start, now)


@dataclass(frozen=True)
class Paired:
    session: WorkSession
    opening: ClockEvent
    closing: ClockEvent


@dataclass(frozen=True)
class OpenTail:
    session: WorkSession
    opening: ClockEvent


@dataclass(frozen=True)
class OrphanSkip:
    event: ClockEvent
    reason: SkipReason


FoldStep = Union[Paired, OpenTail, OrphanSkip]
