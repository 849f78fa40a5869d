from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional

from ..aggregation.aggregator import DurationAggregator
from ..common.datetime_utils import add_months, each_day, end_of_month, now_local, start_of_month
from ..core.enums import AttendanceStatus
from ..events.model import ClockEvent
from ..sessions.model import WorkSession


@dataclass(frozen=True)
class CalendarDay:
    date: date
    total_minutes: int
    hours: float
    status: AttendanceStatus
    has_activity: bool
    is_today: bool

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "totalMinutes": self.total_minutes,
            "hours": self.hours,
            "status": self.status.value,
            "hasActivity": self.has_activity,
            "isToday": self.is_today,
        }


@dataclass(frozen=True)
class CalendarMonth:
    month: date
    leading_blanks: int
    trailing_blanks: int
    days: list[CalendarDay]

    @property
    def previous(self) -> date:
        return add_months(self.month, -1)

    @property
    def next(self) -> date:
        return add_months(self.month, 1)

    def to_dict(self) -> dict:
        return {
            "month": self.month.strftime("%Y-%m"),
            "previous": self.previous.strftime("%Y-%m"),
            "next": self.next.strftime("%Y-%m"),
            "leadingBlanks": self.leading_blanks,
            "trailingBlanks": self.trailing_blanks,
            "days": [d.to_dict() for d in self.days],
        }


@dataclass(frozen=True)
class AttendanceCalendar:
    """Month grid of attendance, laid out in weeks starting on the aggregator's week start."""

    aggregator: DurationAggregator = field(default_factory=DurationAggregator)

    def month(
        self,
        sessions: Iterable[WorkSession],
        events: Iterable[ClockEvent],
        *,
        month: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> CalendarMonth:
        now = now or now_local()
        first = start_of_month(month or now.date())
        last = end_of_month(first)

        totals = self.aggregator.day_totals(sessions, now=now)
        active_days = {e.timestamp.date() for e in events}
        week_start = self.aggregator.week_start

        days = []
        for day in each_day(first, last):
            aggregate = self.aggregator.aggregate_for(day, totals.get(day, 0))
            days.append(
                CalendarDay(
                    date=day,
                    total_minutes=aggregate.total_minutes,
                    hours=aggregate.hours,
                    status=aggregate.status,
                    has_activity=day in active_days,
                    is_today=day == now.date(),
                )
            )

        return CalendarMonth(
            month=first,
            leading_blanks=(first.weekday() - week_start) % 7,
            trailing_blanks=(week_start + 6 - last.weekday()) % 7,
            days=days,
        )
