from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from .base import StatusDecision, StatusPolicy


class HoursStatusPolicy(StatusPolicy):
    """Present on check-in; a short day becomes half_day at check-out."""

    name = "hours"

    def __init__(self, half_day_threshold_minutes: int):
        self._threshold = int(half_day_threshold_minutes)

    def decide_check_in(self, *, current: Optional[AttendanceStatus]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_check_out(self, *, current: AttendanceStatus, worked_minutes: int) -> StatusDecision:
        if current == AttendanceStatus.PRESENT and worked_minutes < self._threshold:
            return StatusDecision(
                status=AttendanceStatus.HALF_DAY,
                note=f"worked {worked_minutes} min < {self._threshold} min",
            )
        return StatusDecision(status=current)
