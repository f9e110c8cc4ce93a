from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import FrozenSet, Optional

from ..common.datetime_utils import format_time, weekday_name
from ..core.enums import ShiftType


@dataclass(frozen=True)
class DutyScheduleTemplate:
    """Domain entity: a named, reusable work-hours definition."""

    template_id: int
    name: str
    shift_type: ShiftType
    start_time: time
    end_time: time
    work_days: FrozenSet[str]
    is_active: bool = True

    def runs_on(self, work_date: date) -> bool:
        return weekday_name(work_date) in {d.lower() for d in self.work_days}

    def to_dict(self) -> dict:
        return {
            "template_id": self.template_id,
            "name": self.name,
            "shift_type": self.shift_type.value,
            "start_time": format_time(self.start_time),
            "end_time": format_time(self.end_time),
            "work_days": sorted(self.work_days),
            "is_active": self.is_active,
        }


@dataclass(frozen=True)
class ResolvedSchedule:
    """The work-day window that applies to one employee on one date.

    Derived on every request, never persisted. Either boundary may be missing;
    a window whose end is before its start runs past midnight into the next
    calendar day.
    """

    start_time: Optional[time]
    end_time: Optional[time]
    source: str = "template"
    template_id: Optional[int] = None

    @property
    def wraps_midnight(self) -> bool:
        return self.start_time is not None and self.end_time is not None and self.end_time < self.start_time

    def to_dict(self) -> dict:
        return {
            "start_time": format_time(self.start_time),
            "end_time": format_time(self.end_time),
            "wraps_midnight": self.wraps_midnight,
            "source": self.source,
            "template_id": self.template_id,
        }
