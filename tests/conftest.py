from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from flowhr_attendance.attendance.model import AttendanceRecord
from flowhr_attendance.container import wire_container
from flowhr_attendance.core.enums import AttendanceStatus, RequestStatus, ShiftType, WorkLocation
from flowhr_attendance.early_checkout.model import EarlyCheckoutRequest
from flowhr_attendance.employees.model import Employee
from flowhr_attendance.location.origin import StaticOriginLookup
from flowhr_attendance.offices.model import OfficeSettings
from flowhr_attendance.schedules.model import DutyScheduleTemplate

OFFICE_IP = "203.0.113.10"
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")


class InMemoryEmployees:
    def __init__(self, *employees: Employee):
        self._by_id = {e.employee_id: e for e in employees}

    def add(self, employee: Employee) -> Employee:
        self._by_id[employee.employee_id] = employee
        return employee

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def list_by_ids(self, employee_ids):
        return [self._by_id[i] for i in dict.fromkeys(employee_ids) if i in self._by_id]

    def update_schedule_assignment(
        self, *, employee_id, duty_schedule_template_id, custom_work_start_time, custom_work_end_time
    ) -> bool:
        employee = self._by_id.get(employee_id)
        if employee is None:
            return False
        self._by_id[employee_id] = replace(
            employee,
            duty_schedule_template_id=duty_schedule_template_id,
            custom_work_start_time=custom_work_start_time,
            custom_work_end_time=custom_work_end_time,
        )
        return True


class InMemoryTemplates:
    def __init__(self, *templates: DutyScheduleTemplate):
        self._by_id = {t.template_id: t for t in templates}
        self._id = max(self._by_id, default=0)

    def get_by_id(self, template_id: int) -> Optional[DutyScheduleTemplate]:
        return self._by_id.get(template_id)

    def list_all(self, *, include_inactive: bool = True):
        return [t for t in self._by_id.values() if include_inactive or t.is_active]

    def create(self, *, name, shift_type, start_time, end_time, work_days, is_active=True) -> int:
        self._id += 1
        self._by_id[self._id] = DutyScheduleTemplate(
            template_id=self._id,
            name=name,
            shift_type=shift_type,
            start_time=start_time,
            end_time=end_time,
            work_days=frozenset(work_days),
            is_active=is_active,
        )
        return self._id

    def update(self, *, template_id, name, shift_type, start_time, end_time, work_days) -> bool:
        current = self._by_id.get(template_id)
        if current is None:
            return False
        self._by_id[template_id] = replace(
            current,
            name=name,
            shift_type=shift_type,
            start_time=start_time,
            end_time=end_time,
            work_days=frozenset(work_days),
        )
        return True

    def set_active(self, template_id: int, *, is_active: bool) -> bool:
        current = self._by_id.get(template_id)
        if current is None:
            return False
        self._by_id[template_id] = replace(current, is_active=is_active)
        return True


class InMemoryOffices:
    def __init__(self, *offices: OfficeSettings):
        self._by_id = {o.office_id: o for o in offices}

    def add(self, office: OfficeSettings) -> OfficeSettings:
        self._by_id[office.office_id] = office
        return office

    def get_for_office(self, office_id: int) -> Optional[OfficeSettings]:
        return self._by_id.get(office_id)


class InMemoryAttendance:
    """Mirrors the conditional updates of the MySQL repository."""

    def __init__(self):
        self._by_id: dict[int, AttendanceRecord] = {}
        self._id = 0

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._by_id.get(attendance_id)

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        for r in self._by_id.values():
            if r.employee_id == employee_id and r.work_date == work_date:
                return r
        return None

    def list_for_date(self, work_date: date):
        return sorted((r for r in self._by_id.values() if r.work_date == work_date), key=lambda r: r.employee_id)

    def list_recent_for_employee(self, employee_id: int, limit: int):
        items = [r for r in self._by_id.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def create_checkin(self, *, employee_id, work_date, in_time, check_in_at, check_in_ip, status) -> Optional[int]:
        if self.get_for_employee_and_date(employee_id, work_date) is not None:
            return None
        self._id += 1
        self._by_id[self._id] = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            in_time=in_time,
            out_time=None,
            status=status,
            check_in_at=check_in_at,
            check_in_ip=check_in_ip,
        )
        return self._id

    def set_checkin(self, *, attendance_id, in_time, check_in_at, check_in_ip, status) -> bool:
        current = self._by_id.get(attendance_id)
        if current is None or current.in_time is not None:
            return False
        self._by_id[attendance_id] = replace(
            current, in_time=in_time, check_in_at=check_in_at, check_in_ip=check_in_ip, status=status
        )
        return True

    def update_checkout(
        self, *, attendance_id, out_time, check_out_at, check_out_ip, break_total_minutes, total_worked_minutes, status
    ) -> bool:
        current = self._by_id.get(attendance_id)
        if current is None or current.in_time is None or current.out_time is not None:
            return False
        self._by_id[attendance_id] = replace(
            current,
            out_time=out_time,
            check_out_at=check_out_at,
            check_out_ip=check_out_ip,
            break_start_at=None,
            break_total_minutes=break_total_minutes,
            total_worked_minutes=total_worked_minutes,
            status=status,
        )
        return True

    def start_break(self, *, attendance_id, break_start_at) -> bool:
        current = self._by_id.get(attendance_id)
        if current is None or current.out_time is not None or current.break_start_at is not None:
            return False
        self._by_id[attendance_id] = replace(current, break_start_at=break_start_at)
        return True

    def end_break(self, *, attendance_id, break_total_minutes) -> bool:
        current = self._by_id.get(attendance_id)
        if current is None or current.break_start_at is None:
            return False
        self._by_id[attendance_id] = replace(current, break_start_at=None, break_total_minutes=break_total_minutes)
        return True

    def admin_upsert(
        self,
        *,
        employee_id,
        work_date,
        in_time,
        out_time,
        check_in_at,
        check_out_at,
        total_worked_minutes,
        status,
        notes=None,
    ) -> int:
        existing = self.get_for_employee_and_date(employee_id, work_date)
        if existing is None:
            self._id += 1
            attendance_id = self._id
            base = AttendanceRecord(
                attendance_id=attendance_id,
                employee_id=employee_id,
                work_date=work_date,
                in_time=None,
                out_time=None,
                status=status,
            )
        else:
            attendance_id = existing.attendance_id
            base = existing
        self._by_id[attendance_id] = replace(
            base,
            in_time=in_time,
            out_time=out_time,
            check_in_at=check_in_at,
            check_out_at=check_out_at,
            break_start_at=None,
            total_worked_minutes=total_worked_minutes,
            status=status,
            notes=notes,
        )
        return attendance_id


class InMemoryEarlyCheckouts:
    def __init__(self):
        self._by_id: dict[int, EarlyCheckoutRequest] = {}
        self._id = 0

    def create(self, *, employee_id, work_date, reason, requested_checkout_time, created_at) -> int:
        self._id += 1
        self._by_id[self._id] = EarlyCheckoutRequest(
            request_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            reason=reason,
            requested_checkout_time=requested_checkout_time,
            status=RequestStatus.PENDING,
            created_at=created_at,
        )
        return self._id

    def get_by_id(self, request_id: int) -> Optional[EarlyCheckoutRequest]:
        return self._by_id.get(request_id)

    def list_for_employee(self, employee_id: int, *, limit: int = 50):
        items = [r for r in self._by_id.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.request_id, reverse=True)
        return items[:limit]

    def list_for_date(self, work_date: date, *, status=None):
        return [
            r
            for r in self._by_id.values()
            if r.work_date == work_date and (status is None or r.status == status)
        ]

    def list_by_status(self, status, *, limit: int = 500):
        return [r for r in self._by_id.values() if r.status == status][:limit]

    def decide(self, *, request_id, status, reviewed_by, reviewed_at, response_notes=None) -> bool:
        current = self._by_id.get(request_id)
        if current is None or current.status != RequestStatus.PENDING:
            return False
        self._by_id[request_id] = replace(
            current,
            status=status,
            reviewed_by=reviewed_by,
            reviewed_at=reviewed_at,
            response_notes=response_notes,
        )
        return True


def make_template(template_id=1, start=time(9, 0), end=time(17, 0), days=WEEKDAYS, *, is_active=True, name="Day"):
    return DutyScheduleTemplate(
        template_id=template_id,
        name=name,
        shift_type=ShiftType.REGULAR,
        start_time=start,
        end_time=end,
        work_days=frozenset(days),
        is_active=is_active,
    )


@pytest.fixture
def fixed_now():
    # Wednesday
    return datetime(2025, 1, 15, 9, 0, 0)


@pytest.fixture
def office():
    return OfficeSettings(
        office_id=1,
        office_name="HQ",
        allowed_ip_ranges=("203.0.113.0/24",),
        require_ip_whitelist=True,
    )


@pytest.fixture
def employees():
    return InMemoryEmployees(
        Employee(employee_id=1, full_name="Alice Nguyen", office_id=1, duty_schedule_template_id=1),
        Employee(
            employee_id=2,
            full_name="Bao Tran",
            work_location=WorkLocation.REMOTE,
            duty_schedule_template_id=1,
        ),
    )


@pytest.fixture
def templates():
    return InMemoryTemplates(make_template())


@pytest.fixture
def offices(office):
    return InMemoryOffices(office)


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def early_checkout_repo():
    return InMemoryEarlyCheckouts()


@pytest.fixture
def origin_lookup():
    return StaticOriginLookup(OFFICE_IP)


@pytest.fixture
def container(employees, templates, offices, attendance_repo, early_checkout_repo, origin_lookup):
    return wire_container(
        employees_repo=employees,
        templates_repo=templates,
        offices_repo=offices,
        attendance_repo=attendance_repo,
        early_checkout_repo=early_checkout_repo,
        origin_lookup=origin_lookup,
    )


@pytest.fixture
def absent_record():
    def _make(employee_id=1, work_date=date(2025, 1, 15)):
        return AttendanceRecord(
            attendance_id=99,
            employee_id=employee_id,
            work_date=work_date,
            in_time=None,
            out_time=None,
            status=AttendanceStatus.ABSENT,
        )

    return _make
