from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from .base import StatusDecision, StatusPolicy


class PresenceStatusPolicy(StatusPolicy):
    """Checked in means present; check-out keeps whatever status is stored."""

    name = "presence"

    def decide_check_in(self, *, current: Optional[AttendanceStatus]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_check_out(self, *, current: AttendanceStatus, worked_minutes: int) -> StatusDecision:
        return StatusDecision(status=current)
