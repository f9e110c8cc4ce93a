from datetime import date, time

from conftest import InMemoryTemplates, make_template
from flowhr_attendance.employees.model import Employee
from flowhr_attendance.schedules.resolver import ScheduleResolver

WEDNESDAY = date(2025, 1, 15)
SATURDAY = date(2025, 1, 18)


def test_template_applies_on_its_weekdays(templates, employees):
    resolver = ScheduleResolver(templates, employees)

    schedule = resolver.resolve_for_employee(1, WEDNESDAY)

    assert schedule.start_time == time(9, 0)
    assert schedule.end_time == time(17, 0)
    assert schedule.source == "template"
    assert schedule.template_id == 1


def test_template_does_not_apply_on_weekend(templates, employees):
    resolver = ScheduleResolver(templates, employees)

    assert resolver.resolve_for_employee(1, SATURDAY) is None


def test_custom_hours_beat_template_every_day(templates):
    employee = Employee(
        employee_id=5,
        full_name="Chi Le",
        duty_schedule_template_id=1,
        custom_work_start_time=time(10, 0),
        custom_work_end_time=time(18, 30),
    )
    resolver = ScheduleResolver(templates)

    for offset in range(7):
        day = date(2025, 1, 13 + offset)
        schedule = resolver.resolve(employee, day)
        assert (schedule.start_time, schedule.end_time) == (time(10, 0), time(18, 30))
        assert schedule.source == "custom"


def test_partial_custom_hours_are_filled_from_template(templates):
    employee = Employee(
        employee_id=5, full_name="Chi Le", duty_schedule_template_id=1, custom_work_start_time=time(8, 0)
    )
    schedule = ScheduleResolver(templates).resolve(employee, WEDNESDAY)

    assert (schedule.start_time, schedule.end_time) == (time(8, 0), time(17, 0))
    assert schedule.source == "mixed"


def test_partial_custom_hours_on_off_day_keep_one_boundary(templates):
    employee = Employee(
        employee_id=5, full_name="Chi Le", duty_schedule_template_id=1, custom_work_end_time=time(16, 0)
    )
    schedule = ScheduleResolver(templates).resolve(employee, SATURDAY)

    assert schedule.start_time is None
    assert schedule.end_time == time(16, 0)
    assert schedule.source == "custom"


def test_inactive_template_is_ignored():
    templates = InMemoryTemplates(make_template(is_active=False))
    employee = Employee(employee_id=5, full_name="Chi Le", duty_schedule_template_id=1)

    assert ScheduleResolver(templates).resolve(employee, WEDNESDAY) is None


def test_missing_template_resolves_to_nothing(templates):
    employee = Employee(employee_id=5, full_name="Chi Le", duty_schedule_template_id=42)

    assert ScheduleResolver(templates).resolve(employee, WEDNESDAY) is None


def test_night_window_wraps_midnight():
    templates = InMemoryTemplates(make_template(start=time(22, 0), end=time(6, 0), name="Night"))
    employee = Employee(employee_id=5, full_name="Chi Le", duty_schedule_template_id=1)

    schedule = ScheduleResolver(templates).resolve(employee, WEDNESDAY)

    assert schedule.wraps_midnight is True
    assert schedule.to_dict()["wraps_midnight"] is True
