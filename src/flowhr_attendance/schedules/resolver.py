from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import ResolvedSchedule
from .repository import DutyScheduleTemplateRepository

logger = logging.getLogger(__name__)


class ScheduleResolver:
    """Decide which work-day window applies to an employee on a date.

    Precedence: custom hours > assigned template (when it runs that weekday)
    > nothing. A custom boundary left unset is filled from the template.
    Results are computed on every call; template assignment or custom hours
    may change between two views.
    """

    def __init__(self, templates: DutyScheduleTemplateRepository, employees: EmployeeRepository | None = None):
        self._templates = templates
        self._employees = employees

    def resolve(self, employee: Employee, work_date: date) -> Optional[ResolvedSchedule]:
        template_start = template_end = None
        template_id = None

        if employee.duty_schedule_template_id is not None:
            template = self._templates.get_by_id(employee.duty_schedule_template_id)
            if template is None:
                logger.warning(
                    "Employee %s references missing duty schedule template %s",
                    employee.employee_id,
                    employee.duty_schedule_template_id,
                )
            elif template.is_active and template.runs_on(work_date):
                template_start, template_end = template.start_time, template.end_time
                template_id = template.template_id

        start = employee.custom_work_start_time if employee.custom_work_start_time is not None else template_start
        end = employee.custom_work_end_time if employee.custom_work_end_time is not None else template_end

        if start is None and end is None:
            return None

        if not employee.has_custom_hours:
            source = "template"
        elif template_id is None or (
            employee.custom_work_start_time is not None and employee.custom_work_end_time is not None
        ):
            source = "custom"
        else:
            source = "mixed"

        return ResolvedSchedule(
            start_time=start,
            end_time=end,
            source=source,
            template_id=template_id if source != "custom" else None,
        )

    def resolve_for_employee(self, employee_id: int, work_date: date) -> Optional[ResolvedSchedule]:
        if self._employees is None:
            raise RuntimeError("ScheduleResolver was built without an employee repository")
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return self.resolve(employee, work_date)
