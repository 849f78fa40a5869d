from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import end_of_week, now_local, start_of_week, whole_minutes
from ..common.formatters import format_minutes
from ..core.enums import ClockEventType, HistoryRange
from ..core.constants import DEFAULT_WEEK_START
from .model import ClockEvent


@dataclass(frozen=True)
class HistoryEntry:
    event: ClockEvent
    # Set on an IN that is directly followed by an OUT on the same day.
    duration_label: Optional[str] = None

    def to_dict(self) -> dict:
        data = self.event.to_payload()
        data["duration"] = self.duration_label
        return data


@dataclass(frozen=True)
class HistoryDay:
    date: date
    entries: list[HistoryEntry]

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "events": [e.to_dict() for e in self.entries]}


@dataclass(frozen=True)
class ClockHistory:
    week_start: int = DEFAULT_WEEK_START

    def window(self, history_range: HistoryRange, today: date) -> Optional[tuple[date, date]]:
        if history_range == HistoryRange.TODAY:
            return today, today
        if history_range == HistoryRange.YESTERDAY:
            yesterday = today - timedelta(days=1)
            return yesterday, yesterday
        if history_range == HistoryRange.WEEK:
            return start_of_week(today, week_start=self.week_start), end_of_week(today, week_start=self.week_start)
        return None

    def group(
        self,
        events: Iterable[ClockEvent],
        history_range: HistoryRange = HistoryRange.TODAY,
        *,
        now: Optional[datetime] = None,
    ) -> list[HistoryDay]:
        """Events per calendar day, newest day first, each day oldest event first."""
        now = now or now_local()
        bounds = self.window(history_range, now.date())

        by_day: dict[date, list[ClockEvent]] = defaultdict(list)
        for e in events:
            day = e.timestamp.date()
            if bounds and not bounds[0] <= day <= bounds[1]:
                continue
            by_day[day].append(e)

        return [
            HistoryDay(date=day, entries=self._entries(sorted(by_day[day], key=lambda e: (e.timestamp, e.event_id))))
            for day in sorted(by_day, reverse=True)
        ]

    @staticmethod
    def _entries(day_events: list[ClockEvent]) -> list[HistoryEntry]:
        entries = []
        for index, event in enumerate(day_events):
            label = None
            following = day_events[index + 1] if index + 1 < len(day_events) else None
            if event.type == ClockEventType.IN and following is not None and following.type == ClockEventType.OUT:
                label = format_minutes(whole_minutes(event.timestamp, following.timestamp))
            entries.append(HistoryEntry(event=event, duration_label=label))
        return entries
