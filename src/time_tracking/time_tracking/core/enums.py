from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles read from the authenticated session."""

    ADMIN = "admin"
    STAFF = "staff"


class ClockEventType(str, Enum):
    """Kind of an atomic clock event, also used as the current clock status."""

    IN = "IN"
    OUT = "OUT"


class AttendanceStatus(str, Enum):
    """Classification of one day's worked minutes."""

    PRESENT = "present"
    PARTIAL = "partial"
    ABSENT = "absent"


class TrackerState(str, Enum):
    INACTIVE = "INACTIVE"
    ACTIVE = "ACTIVE"
    ON_BREAK = "ON_BREAK"


class AnalyticsPeriod(str, Enum):
    WEEK = "week"
    MONTH = "month"


class HistoryRange(str, Enum):
    TODAY = "today"
    YESTERDAY = "yesterday"
    WEEK = "week"
    ALL = "all"


class SkipReason(str, Enum):
    """Why the session fold dropped an event."""

    ORPHAN_OUT = "orphan_out"
    DOUBLE_IN = "double_in"
