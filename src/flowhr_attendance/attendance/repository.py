from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Persistence for attendance records.

    Mutations are conditional single-row statements; a False/None result
    means the row was not in the expected state (or is missing).
    """

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        in_time: time,
        check_in_at: datetime,
        check_in_ip: Optional[str],
        status: AttendanceStatus,
    ) -> Optional[int]:
        """Insert the day's record; None if one already exists for (employee, date)."""

        raise NotImplementedError

    def set_checkin(
        self,
        *,
        attendance_id: int,
        in_time: time,
        check_in_at: datetime,
        check_in_ip: Optional[str],
        status: AttendanceStatus,
    ) -> bool:
        """Fill check-in on an existing record that has none yet."""

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        out_time: time,
        check_out_at: datetime,
        check_out_ip: Optional[str],
        break_total_minutes: int,
        total_worked_minutes: int,
        status: AttendanceStatus,
    ) -> bool:
        """Set check-out once; also closes any open break."""

        raise NotImplementedError

    def start_break(self, *, attendance_id: int, break_start_at: datetime) -> bool:
        raise NotImplementedError

    def end_break(self, *, attendance_id: int, break_total_minutes: int) -> bool:
        raise NotImplementedError

    def admin_upsert(
        self,
        *,
        employee_id: int,
        work_date: date,
        in_time: Optional[time],
        out_time: Optional[time],
        check_in_at: Optional[datetime],
        check_out_at: Optional[datetime],
        total_worked_minutes: Optional[int],
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> int:
        """Admin-only manual entry/correction. Returns attendance_id."""

        raise NotImplementedError
