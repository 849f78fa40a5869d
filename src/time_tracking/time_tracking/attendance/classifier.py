from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import AttendanceStatus
from .policy import AttendancePolicy


@dataclass(frozen=True)
class AttendanceClassifier:
    policy: AttendancePolicy = field(default_factory=AttendancePolicy)

    def classify(self, total_minutes: int) -> AttendanceStatus:
        if total_minutes >= self.policy.present_minutes:
            return AttendanceStatus.PRESENT
        if total_minutes > self.policy.partial_floor_minutes:
            return AttendanceStatus.PARTIAL
        return AttendanceStatus.ABSENT
