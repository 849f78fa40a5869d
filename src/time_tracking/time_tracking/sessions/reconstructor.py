from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from ..core.enums import ClockEventType, SkipReason
from ..events.model import ClockEvent
from .model import FoldStep, OpenTail, OrphanSkip, Paired, WorkSession

logger = logging.getLogger(__name__)


@dataclass
class SessionReconstructor:
    """Fold a sorted event series into work sessions.

    Rules, applied to adjacent events only:
    - IN then OUT closes a session.
    - An OUT without a pending IN is skipped.
    - An IN followed by another IN is skipped; pairing resumes from the later IN.
    - A trailing IN becomes an open session.
    Skipped events are reported as `OrphanSkip` steps, never raised.
    """

    def steps(self, events: Iterable[ClockEvent]) -> Iterator[FoldStep]:
        pending: Optional[ClockEvent] = None

        for event in events:
            if event.type == ClockEventType.IN:
                if pending is not None:
                    yield self._skip(pending, SkipReason.DOUBLE_IN)
                pending = event
                continue

            if pending is None:
                yield self._skip(event, SkipReason.ORPHAN_OUT)
                continue

            yield Paired(
                session=WorkSession(start=pending.timestamp, end=event.timestamp),
                opening=pending,
                closing=event,
            )
            pending = None

        if pending is not None:
            yield OpenTail(session=WorkSession(start=pending.timestamp), opening=pending)

    def reconstruct(self, events: Iterable[ClockEvent]) -> list[WorkSession]:
        return [step.session for step in self.steps(events) if not isinstance(step, OrphanSkip)]

    def open_session(self, events: Iterable[ClockEvent]) -> Optional[WorkSession]:
        for step in self.steps(events):
            if isinstance(step, OpenTail):
                return step.session
        return None

    def orphans(self, events: Iterable[ClockEvent]) -> list[OrphanSkip]:
        return [step for step in self.steps(events) if isinstance(step, OrphanSkip)]

    @staticmethod
    def _skip(event: ClockEvent, reason: SkipReason) -> OrphanSkip:
        logger.debug("skipping clock event id=%s type=%s (%s)", event.event_id, event.type.value, reason.value)
        return OrphanSkip(event=event, reason=reason)
