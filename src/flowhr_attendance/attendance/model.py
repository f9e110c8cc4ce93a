from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import format_minutes, format_time
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar date.

    ``total_worked_minutes`` is computed once at check-out (elapsed minus
    breaks); ``notes`` is free text only.
    """

    attendance_id: int
    employee_id: int
    work_date: date
    in_time: Optional[time]
    out_time: Optional[time]
    status: AttendanceStatus
    check_in_at: Optional[datetime] = None
    check_out_at: Optional[datetime] = None
    check_in_ip: Optional[str] = None
    check_out_ip: Optional[str] = None
    break_start_at: Optional[datetime] = None
    break_total_minutes: int = 0
    total_worked_minutes: Optional[int] = None
    notes: Optional[str] = None

    @property
    def is_checked_in(self) -> bool:
        return self.in_time is not None

    @property
    def is_checked_out(self) -> bool:
        return self.out_time is not None

    @property
    def is_on_break(self) -> bool:
        return self.break_start_at is not None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "employee_id": self.employee_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "in_time": format_time(self.in_time),
            "out_time": format_time(self.out_time),
            "status": self.status.value,
            "check_in_at": self.check_in_at.isoformat() if self.check_in_at else None,
            "check_out_at": self.check_out_at.isoformat() if self.check_out_at else None,
            "check_in_ip": self.check_in_ip,
            "check_out_ip": self.check_out_ip,
            "on_break": self.is_on_break,
            "break_total_minutes": self.break_total_minutes,
            "total_worked_minutes": self.total_worked_minutes,
            "total_worked": format_minutes(self.total_worked_minutes),
            "notes": self.notes,
        }
