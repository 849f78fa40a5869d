from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from ..aggregation.model import DayAggregate, PeriodSummary
from ..analytics.bucketizer import Bucket
from ..attendance.calendar import CalendarMonth
from ..common.datetime_utils import now_local
from ..core.enums import AnalyticsPeriod, ClockEventType, HistoryRange, TrackerState
from ..core.exceptions import ClockServiceError
from ..events.history import HistoryDay
from ..events.model import ClockEvent
from ..timesheet.pipeline import TimesheetPipeline
from .live_tracker import LiveElapsedTracker
from .source import ClockEventSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Everything fetched by one refresh. Views are computed from one snapshot only."""

    status: ClockEventType
    day_events: tuple[ClockEvent, ...]
    events: tuple[ClockEvent, ...]
    fetched_at: datetime


EMPTY_SNAPSHOT = Snapshot(status=ClockEventType.OUT, day_events=(), events=(), fetched_at=datetime.min)


class TimeTrackingService:
    """Dashboard state for one user: latest snapshot, clock actions, live counter.

    A refresh replaces the snapshot only once all of its fetches have resolved,
    and only if no newer refresh was started and the view is still open.
    """

    def __init__(
        self,
        source: ClockEventSource,
        *,
        pipeline: Optional[TimesheetPipeline] = None,
        tracker: Optional[LiveElapsedTracker] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._source = source
        self._pipeline = pipeline or TimesheetPipeline()
        self._clock = clock
        self._tracker = tracker or LiveElapsedTracker(clock=clock)
        self._snapshot = EMPTY_SNAPSHOT
        self._generation = 0
        self._open = False

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def tracker(self) -> LiveElapsedTracker:
        return self._tracker

    @property
    def status(self) -> ClockEventType:
        return self._snapshot.status

    async def open(self) -> Snapshot:
        """Attach the view and load the initial snapshot."""
        self._open = True
        self._tracker.attach_view()
        await self.refresh()
        return self._snapshot

    async def close(self) -> None:
        self._open = False
        self._generation += 1
        await self._tracker.close()

    async def refresh(self) -> Optional[Snapshot]:
        """Fetch status, today's events and history; None when the result arrived stale."""
        self._generation += 1
        token = self._generation

        try:
            status, day_events, events = await asyncio.gather(
                self._source.get_status(),
                self._source.get_day_events(),
                self._source.get_events(),
            )
        except Exception:
            # a failed refresh must not invalidate an older one still in flight
            if token == self._generation:
                self._generation = token - 1
            raise

        if token != self._generation or not self._open:
            logger.debug("discarding stale refresh (token=%s, current=%s)", token, self._generation)
            return None

        now = self._clock()
        self._snapshot = Snapshot(
            status=status,
            day_events=tuple(day_events),
            events=tuple(events),
            fetched_at=now,
        )
        self._sync_tracker(now)
        return self._snapshot

    async def clock(self, event_type: ClockEventType) -> ClockEvent:
        """Submit a clock mutation; on failure nothing local changes."""
        event = await self._source.clock(event_type)

        if not self._open:
            logger.debug("view closed before clock %s resolved", event_type.value)
            return event

        if event_type == ClockEventType.IN:
            if self._tracker.state == TrackerState.INACTIVE:
                self._tracker.clock_in(event.timestamp)
            else:
                # active without an anchor after a reload
                self._tracker.resume(event.timestamp)
        elif self._tracker.state != TrackerState.INACTIVE:
            self._tracker.clock_out()

        try:
            await self.refresh()
        except ClockServiceError as e:
            # The mutation is recorded server-side; the next refresh will catch up.
            logger.warning("refresh after clock %s failed: %s", event_type.value, e.message)
        return event

    async def toggle_clock(self) -> ClockEvent:
        target = ClockEventType.OUT if self.status == ClockEventType.IN else ClockEventType.IN
        return await self.clock(target)

    def toggle_break(self) -> TrackerState:
        return self._tracker.toggle_break()

    def elapsed_display(self, now: Optional[datetime] = None) -> str:
        return self._tracker.display(now)

    def summary(self, *, now: Optional[datetime] = None) -> PeriodSummary:
        return self._pipeline.summary(self._snapshot.events, now=now or self._clock())

    def day_aggregates(self, *, now: Optional[datetime] = None) -> list[DayAggregate]:
        return self._pipeline.day_aggregates(self._snapshot.events, now=now or self._clock())

    def analytics(
        self,
        period: AnalyticsPeriod = AnalyticsPeriod.WEEK,
        *,
        anchor: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> list[Bucket]:
        return self._pipeline.analytics(self._snapshot.events, period, now=now or self._clock(), anchor=anchor)

    def calendar(self, *, month: Optional[date] = None, now: Optional[datetime] = None) -> CalendarMonth:
        return self._pipeline.attendance_calendar(self._snapshot.events, month=month, now=now or self._clock())

    def history(self, history_range: HistoryRange = HistoryRange.TODAY, *, now: Optional[datetime] = None) -> list[HistoryDay]:
        return self._pipeline.clock_history(self._snapshot.events, history_range, now=now or self._clock())

    def _sync_tracker(self, now: datetime) -> None:
        if self._snapshot.status != ClockEventType.IN:
            self._tracker.reset()
            return

        open_session = self._pipeline.open_session(self._snapshot.day_events, now=now)
        anchor = open_session.start if open_session and open_session.day_key == now.date() else None
        self._tracker.resume(anchor)
