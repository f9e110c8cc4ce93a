from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class StatusPolicy(ABC):
    """Strategy Pattern: how the stored presence status is decided.

    Timing (early/late) is never part of the status; it is derived for display.
    """

    name: str = ""

    @abstractmethod
    def decide_check_in(self, *, current: Optional[AttendanceStatus]) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_check_out(self, *, current: AttendanceStatus, worked_minutes: int) -> StatusDecision:
        raise NotImplementedError
