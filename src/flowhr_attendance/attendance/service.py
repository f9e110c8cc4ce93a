from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, parse_time_of_day, whole_minutes
from ..common.validators import optional_text, require_admin
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    BreakAlreadyStarted,
    BreakNotStarted,
    DataAnomalyError,
    LocationDeniedError,
    NotCheckedIn,
    NotFoundError,
    ValidationError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..location.gate import LocationCheck, LocationGate
from ..location.geo import GeoPosition
from ..schedules.resolver import ScheduleResolver
from .factory import StatusPolicyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .strategies.base import StatusPolicy

logger = logging.getLogger(__name__)


class AttendanceService:
    """The attendance ledger: check-in, check-out, breaks and admin corrections.

    Self-service mutations go through the location gate first; admin
    corrections bypass it. Each mutation re-reads the row before writing and
    the write itself is conditional, so a double submission surfaces as a
    state conflict instead of a second row.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        gate: LocationGate,
        resolver: ScheduleResolver,
        *,
        status_policy: StatusPolicy | None = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._gate = gate
        self._resolver = resolver
        self._policy = status_policy or StatusPolicyFactory().for_name("presence")

    def _get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _require_location(self, employee: Employee, position: GeoPosition | None) -> LocationCheck:
        check = self._gate.check(employee, position=position)
        if not check.is_allowed:
            raise LocationDeniedError(check)
        return check

    def _overnight_date(self, employee: Employee, now: datetime) -> Optional[date]:
        """Yesterday, if yesterday's window runs past midnight; else None."""

        yesterday = now.date() - timedelta(days=1)
        schedule = self._resolver.resolve(employee, yesterday)
        if schedule is not None and schedule.wraps_midnight:
            return yesterday
        return None

    # ----- check-in -----
    def check_in(
        self, employee_id: int, *, now: Optional[datetime] = None, position: GeoPosition | None = None
    ) -> AttendanceRecord:
        now = now or now_local()
        employee = self._get_employee(employee_id)
        check = self._require_location(employee, position)

        work_date = now.date()
        overnight = self._overnight_date(employee, now)
        if overnight is not None:
            schedule = self._resolver.resolve(employee, overnight)
            previous = self._attendance.get_for_employee_and_date(employee.employee_id, overnight)
            if now.time() < schedule.end_time:
                if previous is not None and previous.is_checked_in and not previous.is_checked_out:
                    # Last night's shift is still open.
                    raise AlreadyCheckedIn("You have already checked in for the current shift")
                if previous is None or not previous.is_checked_in:
                    # Late arrival for last night's shift, still within its window.
                    work_date = overnight

        return self.record_check_in(employee.employee_id, work_date, now, origin=check.current_ip)

    def record_check_in(
        self, employee_id: int, work_date: date, timestamp: datetime, *, origin: Optional[str] = None
    ) -> AttendanceRecord:
        timestamp = timestamp.replace(microsecond=0)
        existing = self._attendance.get_for_employee_and_date(int(employee_id), work_date)
        if existing and existing.is_checked_in:
            raise AlreadyCheckedIn("You have already checked in today")

        decision = self._policy.decide_check_in(current=existing.status if existing else None)

        if existing:
            ok = self._attendance.set_checkin(
                attendance_id=existing.attendance_id,
                in_time=timestamp.time(),
                check_in_at=timestamp,
                check_in_ip=origin,
                status=decision.status,
            )
        else:
            ok = (
                self._attendance.create_checkin(
                    employee_id=int(employee_id),
                    work_date=work_date,
                    in_time=timestamp.time(),
                    check_in_at=timestamp,
                    check_in_ip=origin,
                    status=decision.status,
                )
                is not None
            )
        if not ok:
            raise AlreadyCheckedIn("You have already checked in today")

        logger.info("Employee %s checked in for %s at %s (ip=%s)", employee_id, work_date, timestamp.time(), origin)
        return self._attendance.get_for_employee_and_date(int(employee_id), work_date)

    # ----- check-out -----
    def _open_record(self, employee: Employee, now: datetime) -> Optional[AttendanceRecord]:
        today = self._attendance.get_for_employee_and_date(employee.employee_id, now.date())
        if today and today.is_checked_in:
            return today

        overnight = self._overnight_date(employee, now)
        if overnight is not None:
            previous = self._attendance.get_for_employee_and_date(employee.employee_id, overnight)
            if previous and previous.is_checked_in and not previous.is_checked_out:
                return previous
        return today

    def check_out(
        self, employee_id: int, *, now: Optional[datetime] = None, position: GeoPosition | None = None
    ) -> AttendanceRecord:
        now = now or now_local()
        employee = self._get_employee(employee_id)
        check = self._require_location(employee, position)

        record = self._open_record(employee, now)
        return self._record_check_out(record, now, origin=check.current_ip)

    def record_check_out(
        self, employee_id: int, work_date: date, timestamp: datetime, *, origin: Optional[str] = None
    ) -> AttendanceRecord:
        record = self._attendance.get_for_employee_and_date(int(employee_id), work_date)
        return self._record_check_out(record, timestamp, origin=origin)

    def _record_check_out(
        self, record: Optional[AttendanceRecord], timestamp: datetime, *, origin: Optional[str]
    ) -> AttendanceRecord:
        timestamp = timestamp.replace(microsecond=0)
        if record is None or not record.is_checked_in:
            raise NotCheckedIn("You have not checked in today")
        if record.is_checked_out:
            raise AlreadyCheckedOut("You have already checked out today")

        check_in_at = record.check_in_at or datetime.combine(record.work_date, record.in_time)
        elapsed = whole_minutes(timestamp - check_in_at)
        if elapsed < 0:
            logger.warning(
                "Rejected check-out before check-in for employee %s on %s (%s < %s)",
                record.employee_id,
                record.work_date,
                timestamp,
                check_in_at,
            )
            raise DataAnomalyError("Check-out time is earlier than check-in time")

        break_total = record.break_total_minutes
        if record.break_start_at is not None:
            break_total += max(0, whole_minutes(timestamp - record.break_start_at))

        worked = max(0, elapsed - break_total)
        decision = self._policy.decide_check_out(current=record.status, worked_minutes=worked)
        if decision.note:
            logger.info(
                "Employee %s status for %s set to %s: %s",
                record.employee_id,
                record.work_date,
                decision.status.value,
                decision.note,
            )

        ok = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            out_time=timestamp.time(),
            check_out_at=timestamp,
            check_out_ip=origin,
            break_total_minutes=break_total,
            total_worked_minutes=worked,
            status=decision.status,
        )
        if not ok:
            raise AlreadyCheckedOut("You have already checked out today")

        logger.info(
            "Employee %s checked out for %s at %s: worked %d min, break %d min",
            record.employee_id,
            record.work_date,
            timestamp.time(),
            worked,
            break_total,
        )
        return self._attendance.get_by_id(record.attendance_id)

    # ----- breaks -----
    def start_break(
        self, employee_id: int, *, now: Optional[datetime] = None, position: GeoPosition | None = None
    ) -> AttendanceRecord:
        now = (now or now_local()).replace(microsecond=0)
        employee = self._get_employee(employee_id)
        self._require_location(employee, position)

        record = self._open_record(employee, now)
        if record is None or not record.is_checked_in:
            raise NotCheckedIn("You have not checked in today")
        if record.is_checked_out:
            raise AlreadyCheckedOut("You have already checked out today")
        if record.is_on_break:
            raise BreakAlreadyStarted("A break is already in progress")

        if not self._attendance.start_break(attendance_id=record.attendance_id, break_start_at=now):
            raise BreakAlreadyStarted("A break is already in progress")
        logger.info("Employee %s started a break at %s", employee_id, now.time())
        return self._attendance.get_by_id(record.attendance_id)

    def end_break(
        self, employee_id: int, *, now: Optional[datetime] = None, position: GeoPosition | None = None
    ) -> AttendanceRecord:
        now = (now or now_local()).replace(microsecond=0)
        employee = self._get_employee(employee_id)
        self._require_location(employee, position)

        record = self._open_record(employee, now)
        if record is None or not record.is_checked_in:
            raise NotCheckedIn("You have not checked in today")
        if record.is_checked_out:
            raise AlreadyCheckedOut("You have already checked out today")
        if not record.is_on_break:
            raise BreakNotStarted("No break is in progress")

        total = record.break_total_minutes + max(0, whole_minutes(now - record.break_start_at))
        if not self._attendance.end_break(attendance_id=record.attendance_id, break_total_minutes=total):
            raise BreakNotStarted("No break is in progress")
        logger.info("Employee %s ended a break at %s (total %d min)", employee_id, now.time(), total)
        return self._attendance.get_by_id(record.attendance_id)

    # ----- reads -----
    def get_for_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_employee_and_date(int(employee_id), work_date)

    def get_recent(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_recent_for_employee(int(employee_id), int(limit))

    # ----- admin -----
    def admin_record(
        self,
        *,
        current_role: Role,
        employee_id: int,
        work_date: date,
        status: str | AttendanceStatus,
        in_time: str | time | None = None,
        out_time: str | time | None = None,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        """Manual entry or correction by an administrator (no location gate)."""

        require_admin(current_role)
        employee = self._get_employee(employee_id)

        try:
            status = AttendanceStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown attendance status: {status!r}")

        in_t = parse_time_of_day(in_time)
        out_t = parse_time_of_day(out_time)
        if out_t is not None and in_t is None:
            raise ValidationError("Check-out time requires a check-in time")

        check_in_at = datetime.combine(work_date, in_t) if in_t is not None else None
        check_out_at = None
        worked = None
        if out_t is not None:
            out_date = work_date
            if out_t < in_t:
                schedule = self._resolver.resolve(employee, work_date)
                if schedule is None or not schedule.wraps_midnight:
                    raise DataAnomalyError("Check-out time cannot be earlier than check-in time")
                out_date = work_date + timedelta(days=1)
            check_out_at = datetime.combine(out_date, out_t)
            worked = whole_minutes(check_out_at - check_in_at)

        attendance_id = self._attendance.admin_upsert(
            employee_id=employee.employee_id,
            work_date=work_date,
            in_time=in_t,
            out_time=out_t,
            check_in_at=check_in_at,
            check_out_at=check_out_at,
            total_worked_minutes=worked,
            status=status,
            notes=optional_text(notes),
        )
        logger.info(
            "Admin recorded attendance %s for employee %s on %s: %s %s-%s",
            attendance_id,
            employee.employee_id,
            work_date,
            status.value,
            in_t,
            out_t,
        )
        return self._attendance.get_by_id(attendance_id)
