from datetime import datetime, time, timedelta

import pytest

from conftest import OFFICE_IP, InMemoryTemplates, make_template
from flowhr_attendance.container import wire_container
from flowhr_attendance.core.enums import Role
from flowhr_attendance.core.exceptions import AuthorizationError
from flowhr_attendance.employees.model import Employee
from flowhr_attendance.location.origin import StaticOriginLookup

ALL_DAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def _at(fixed_now, hh, mm):
    return datetime.combine(fixed_now.date(), time(hh, mm))


def _leave_early(container, fixed_now, *, out=(15, 30), requested="15:00", decision="approve"):
    container.attendance_service.check_in(1, now=_at(fixed_now, 9, 0))
    req = container.early_checkout_service.submit(
        employee_id=1, reason="School pickup", requested_time=requested, now=_at(fixed_now, 10, 0)
    )
    if decision:
        container.early_checkout_service.review(
            current_role=Role.ADMIN, reviewer_id=100, request_id=req.request_id, decision=decision
        )
    container.attendance_service.check_out(1, now=_at(fixed_now, *out))


def _row(container, fixed_now):
    view = container.review_service.admin_day_view(current_role=Role.ADMIN, work_date=fixed_now.date())
    assert view["count"] == 1
    return view["rows"][0]


def test_approved_request_sanctions_early_checkout(container, fixed_now):
    _leave_early(container, fixed_now)

    row = _row(container, fixed_now)

    assert row["raw_labels"] == ["early_check_out"]
    assert row["labels"] == []
    assert row["early_checkout_sanctioned"] is True
    assert row["employee_name"] == "Alice Nguyen"
    assert row["worked"] == "06:30"


def test_leaving_before_requested_time_is_not_sanctioned(container, fixed_now):
    _leave_early(container, fixed_now, out=(14, 0), requested="15:00")

    row = _row(container, fixed_now)

    assert row["labels"] == ["early_check_out"]
    assert row["early_checkout_sanctioned"] is False


def test_declined_request_does_not_sanction(container, fixed_now):
    _leave_early(container, fixed_now, decision="decline")

    assert _row(container, fixed_now)["labels"] == ["early_check_out"]


def test_pending_requests_are_listed_in_day_view(container, fixed_now):
    _leave_early(container, fixed_now, decision=None)

    view = container.review_service.admin_day_view(current_role=Role.ADMIN, work_date=fixed_now.date())

    assert len(view["pending_requests"]) == 1
    assert view["rows"][0]["labels"] == ["early_check_out"]


def test_day_view_requires_admin(container, fixed_now):
    with pytest.raises(AuthorizationError):
        container.review_service.admin_day_view(current_role=Role.EMPLOYEE, work_date=fixed_now.date())


def test_employee_today_on_saturday_has_no_schedule_or_labels(container, fixed_now):
    saturday = fixed_now + timedelta(days=3)
    container.attendance_service.check_in(1, now=saturday)

    today = container.review_service.employee_today(1, now=saturday)

    assert today["schedule"] is None
    assert today["record"]["labels"] == []
    assert today["location"]["state"] == "allowed"


def test_employee_today_without_record(container, fixed_now):
    today = container.review_service.employee_today(1, now=fixed_now)

    assert today["record"] is None
    assert today["schedule"]["start_time"] == "09:00:00"
    assert today["early_checkout_requests"] == []


def test_employee_today_shows_open_night_shift_after_midnight(
    employees, offices, attendance_repo, early_checkout_repo, fixed_now
):
    employees.add(Employee(employee_id=3, full_name="Dung Pham", office_id=1, duty_schedule_template_id=1))
    night = wire_container(
        employees_repo=employees,
        templates_repo=InMemoryTemplates(make_template(start=time(22, 0), end=time(6, 0), days=ALL_DAYS)),
        offices_repo=offices,
        attendance_repo=attendance_repo,
        early_checkout_repo=early_checkout_repo,
        origin_lookup=StaticOriginLookup(OFFICE_IP),
    )
    night.attendance_service.check_in(3, now=_at(fixed_now, 22, 0))

    today = night.review_service.employee_today(3, now=_at(fixed_now, 1, 0) + timedelta(days=1))

    assert today["date"] == fixed_now.date().strftime("%Y-%m-%d")
    assert today["record"]["in_time"] == "22:00:00"
    assert today["record"]["out_time"] is None
    assert today["schedule"]["wraps_midnight"] is True
