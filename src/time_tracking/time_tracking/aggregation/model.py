from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.formatters import format_minutes, minutes_to_hours
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class DayAggregate:
    date: date
    total_minutes: int
    status: AttendanceStatus

    @property
    def hours(self) -> float:
        return minutes_to_hours(self.total_minutes)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "totalMinutes": self.total_minutes,
            "hours": self.hours,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class PeriodTotal:
    """Worked time over one window, ready for display."""

    minutes: int

    @property
    def label(self) -> str:
        return format_minutes(self.minutes)

    @property
    def hours(self) -> float:
        return minutes_to_hours(self.minutes)

    def to_dict(self) -> dict:
        return {"label": self.label, "hours": self.hours, "minutes": self.minutes}


@dataclass(frozen=True)
class PeriodSummary:
    """Totals as of one instant; recompute on every read while a session is open."""

    today: PeriodTotal
    this_week: PeriodTotal
    this_month: PeriodTotal
    this_year: PeriodTotal

    def to_dict(self) -> dict:
        return {
            "today": self.today.to_dict(),
            "thisWeek": self.this_week.to_dict(),
            "thisMonth": self.this_month.to_dict(),
            "thisYear": self.this_year.to_dict(),
        }
