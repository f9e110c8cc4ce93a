from datetime import time

import pytest

from flowhr_attendance.core.enums import Role, ShiftType
from flowhr_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from flowhr_attendance.schedules.service import DutyScheduleService


def _service(templates, employees):
    return DutyScheduleService(templates, employees)


def test_create_template_normalizes_work_days(templates, employees):
    service = _service(templates, employees)

    template_id = service.create_template(
        current_role=Role.ADMIN,
        name=" Night ",
        shift_type="night",
        start_time="22:00",
        end_time="06:00",
        work_days=["Friday", "MONDAY", "monday"],
    )

    created = templates.get_by_id(template_id)
    assert created.name == "Night"
    assert created.shift_type == ShiftType.NIGHT
    assert created.work_days == frozenset({"monday", "friday"})
    assert (created.start_time, created.end_time) == (time(22, 0), time(6, 0))


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "  "},
        {"shift_type": "split"},
        {"start_time": "25:00"},
        {"end_time": ""},
        {"start_time": "09:00", "end_time": "09:00"},
        {"work_days": []},
        {"work_days": ["funday"]},
    ],
)
def test_create_template_rejects_invalid_input(templates, employees, overrides):
    fields = dict(name="Day", shift_type="regular", start_time="09:00", end_time="17:00", work_days=["monday"])
    fields.update(overrides)

    with pytest.raises(ValidationError):
        _service(templates, employees).create_template(current_role=Role.ADMIN, **fields)


def test_employee_cannot_manage_templates(templates, employees):
    with pytest.raises(AuthorizationError):
        _service(templates, employees).set_active(current_role=Role.EMPLOYEE, template_id=1, is_active=False)


def test_update_and_deactivate_template(templates, employees):
    service = _service(templates, employees)

    service.update_template(
        current_role=Role.ADMIN,
        template_id=1,
        name="Early",
        shift_type="regular",
        start_time="07:00",
        end_time="15:00",
        work_days=["monday", "tuesday"],
    )
    service.set_active(current_role=Role.ADMIN, template_id=1, is_active=False)

    template = templates.get_by_id(1)
    assert template.name == "Early"
    assert template.start_time == time(7, 0)
    assert template.is_active is False
    assert service.list_templates(include_inactive=False) == []


def test_update_missing_template(templates, employees):
    with pytest.raises(NotFoundError):
        _service(templates, employees).update_template(
            current_role=Role.ADMIN,
            template_id=9,
            name="X",
            shift_type="regular",
            start_time="07:00",
            end_time="15:00",
            work_days=["monday"],
        )


def test_assign_template_and_custom_hours(templates, employees):
    _service(templates, employees).assign(
        current_role=Role.ADMIN,
        employee_id=1,
        template_id=1,
        custom_start_time="08:30",
        custom_end_time=None,
    )

    employee = employees.get_by_id(1)
    assert employee.duty_schedule_template_id == 1
    assert employee.custom_work_start_time == time(8, 30)
    assert employee.custom_work_end_time is None


def test_assign_rejects_inactive_template(templates, employees):
    templates.set_active(1, is_active=False)

    with pytest.raises(ValidationError):
        _service(templates, employees).assign(current_role=Role.ADMIN, employee_id=1, template_id=1)


def test_assign_unknown_employee(templates, employees):
    with pytest.raises(NotFoundError):
        _service(templates, employees).assign(current_role=Role.ADMIN, employee_id=77, template_id=1)
