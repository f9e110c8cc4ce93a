from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import FrozenSet, Optional, Sequence

from ..common.datetime_utils import format_minutes, now_local
from ..common.validators import require_admin
from ..core.enums import RequestStatus, Role, TimingLabel
from ..core.exceptions import NotFoundError
from ..early_checkout.model import EarlyCheckoutRequest
from ..early_checkout.service import EarlyCheckoutService
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..location.gate import LocationGate
from ..location.geo import GeoPosition
from ..schedules.model import ResolvedSchedule
from ..schedules.resolver import ScheduleResolver
from .classifier import classify_timing, shift_offset
from .model import AttendanceRecord
from .repository import AttendanceRepository

_LABEL_ORDER = (TimingLabel.EARLY_CHECK_IN, TimingLabel.LATE, TimingLabel.EARLY_CHECK_OUT)


def _sorted_labels(labels: FrozenSet[TimingLabel]) -> list[str]:
    return [label.value for label in _LABEL_ORDER if label in labels]


def sanctions_checkout(
    request: EarlyCheckoutRequest, record: AttendanceRecord, schedule: Optional[ResolvedSchedule]
) -> bool:
    """An approved request covers a check-out at or after the time it asked for."""

    if request.status != RequestStatus.APPROVED or record.out_time is None:
        return False
    if request.employee_id != record.employee_id or request.work_date != record.work_date:
        return False
    if schedule is not None and schedule.start_time is not None:
        return shift_offset(record.out_time, schedule) >= shift_offset(request.requested_checkout_time, schedule)
    return record.out_time >= request.requested_checkout_time


def effective_labels(
    raw: FrozenSet[TimingLabel],
    record: AttendanceRecord,
    schedule: Optional[ResolvedSchedule],
    approved: Sequence[EarlyCheckoutRequest],
) -> FrozenSet[TimingLabel]:
    """Raw labels minus an early check-out that an approved request sanctioned."""

    if TimingLabel.EARLY_CHECK_OUT in raw and any(sanctions_checkout(r, record, schedule) for r in approved):
        return raw - {TimingLabel.EARLY_CHECK_OUT}
    return raw


@dataclass(frozen=True)
class AttendanceDayRow:
    """Read-model for one record in the review pages."""

    record: AttendanceRecord
    employee_name: str
    schedule: Optional[ResolvedSchedule]
    raw_labels: FrozenSet[TimingLabel]
    labels: FrozenSet[TimingLabel]
    approved_requests: Sequence[EarlyCheckoutRequest] = field(default_factory=tuple)

    @property
    def early_checkout_sanctioned(self) -> bool:
        return TimingLabel.EARLY_CHECK_OUT in self.raw_labels and TimingLabel.EARLY_CHECK_OUT not in self.labels

    def to_dict(self) -> dict:
        return {
            **self.record.to_dict(),
            "employee_name": self.employee_name,
            "schedule": self.schedule.to_dict() if self.schedule else None,
            "raw_labels": _sorted_labels(self.raw_labels),
            "labels": _sorted_labels(self.labels),
            "early_checkout_sanctioned": self.early_checkout_sanctioned,
            "worked": format_minutes(self.record.total_worked_minutes),
        }


class AttendanceReviewService:
    """Display-time join of records, resolved schedules and early-checkout approvals."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        resolver: ScheduleResolver,
        early_checkouts: EarlyCheckoutService,
        gate: LocationGate,
    ):
        self._attendance = attendance
        self._employees = employees
        self._resolver = resolver
        self._early_checkouts = early_checkouts
        self._gate = gate

    def annotate(
        self,
        record: AttendanceRecord,
        employee: Employee,
        approved: Sequence[EarlyCheckoutRequest] = (),
    ) -> AttendanceDayRow:
        schedule = self._resolver.resolve(employee, record.work_date)
        raw = classify_timing(record, schedule)
        mine = [r for r in approved if r.employee_id == employee.employee_id]
        return AttendanceDayRow(
            record=record,
            employee_name=employee.full_name,
            schedule=schedule,
            raw_labels=raw,
            labels=effective_labels(raw, record, schedule, mine),
            approved_requests=tuple(mine),
        )

    def admin_day_view(self, *, current_role: Role, work_date: date) -> dict:
        require_admin(current_role)

        records = self._attendance.list_for_date(work_date)
        employees = {e.employee_id: e for e in self._employees.list_by_ids([r.employee_id for r in records])}
        requests = self._early_checkouts.list_for_date(work_date)
        approved = [r for r in requests if r.status == RequestStatus.APPROVED]

        rows = []
        for record in records:
            employee = employees.get(record.employee_id)
            if employee is None:
                continue
            rows.append(self.annotate(record, employee, approved).to_dict())

        return {
            "date": work_date.strftime("%Y-%m-%d"),
            "count": len(rows),
            "rows": rows,
            "pending_requests": [r.to_dict() for r in requests if r.status == RequestStatus.PENDING],
        }

    def _open_overnight_record(self, employee: Employee, now: datetime) -> Optional[AttendanceRecord]:
        """Last night's record while its wrapping window is still running and it is not checked out."""

        yesterday = now.date() - timedelta(days=1)
        schedule = self._resolver.resolve(employee, yesterday)
        if schedule is None or not schedule.wraps_midnight or now.time() >= schedule.end_time:
            return None
        previous = self._attendance.get_for_employee_and_date(employee.employee_id, yesterday)
        if previous is not None and previous.is_checked_in and not previous.is_checked_out:
            return previous
        return None

    def employee_today(
        self,
        employee_id: int,
        *,
        now: Optional[datetime] = None,
        position: GeoPosition | None = None,
    ) -> dict:
        now = now or now_local()
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")

        work_date = now.date()
        record = self._attendance.get_for_employee_and_date(employee.employee_id, work_date)
        overnight = self._open_overnight_record(employee, now)
        if overnight is not None and (record is None or not record.is_checked_in):
            record, work_date = overnight, overnight.work_date

        schedule = self._resolver.resolve(employee, work_date)
        approved = self._early_checkouts.approved_for(employee.employee_id, work_date)
        row = self.annotate(record, employee, approved).to_dict() if record else None

        return {
            "date": work_date.strftime("%Y-%m-%d"),
            "schedule": schedule.to_dict() if schedule else None,
            "record": row,
            "location": self._gate.check(employee, position=position).to_dict(),
            "early_checkout_requests": [
                r.to_dict() for r in self._early_checkouts.list_for_employee(employee.employee_id, limit=10)
            ],
        }
