from __future__ import annotations

from datetime import datetime


def format_minutes(minutes: int) -> str:
    """Render minutes as ``"{h}h {m}m"`` (truncated, no rounding)."""
    minutes = max(int(minutes), 0)
    return f"{minutes // 60}h {minutes % 60}m"


def minutes_to_hours(minutes: int) -> float:
    """Hours with one decimal, as shown next to the ``"Hh Mm"`` label."""
    return round(max(int(minutes), 0) / 60, 1)


def format_elapsed(start: datetime, now: datetime) -> str:
    """Render ``now - start`` as ``HH:MM:SS``; a negative span shows as zero."""
    total = int((now - start).total_seconds())
    if total < 0:
        total = 0
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
