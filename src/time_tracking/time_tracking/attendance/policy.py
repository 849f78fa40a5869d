from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.constants import PARTIAL_FLOOR_MINUTES, PRESENT_THRESHOLD_MINUTES
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendancePolicy:
    """Minute thresholds used to classify a day.

    present: total >= present_minutes
    partial: partial_floor_minutes < total < present_minutes
    absent:  everything else
    """

    present_minutes: int = PRESENT_THRESHOLD_MINUTES
    partial_floor_minutes: int = PARTIAL_FLOOR_MINUTES

    def __post_init__(self):
        if self.partial_floor_minutes < 0:
            raise ValidationError("partial_floor_minutes must not be negative")
        if self.present_minutes <= self.partial_floor_minutes:
            raise ValidationError("present_minutes must be greater than partial_floor_minutes")

    @classmethod
    def from_settings(cls, settings: Any) -> "AttendancePolicy":
        return cls(
            present_minutes=int(getattr(settings, "PRESENT_THRESHOLD_MINUTES", PRESENT_THRESHOLD_MINUTES)),
            partial_floor_minutes=int(getattr(settings, "PARTIAL_FLOOR_MINUTES", PARTIAL_FLOOR_MINUTES)),
        )
