from __future__ import annotations

import logging
from datetime import time
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import parse_time_of_day
from ..common.validators import require_admin, require_non_empty
from ..core.constants import WEEKDAY_NAMES
from ..core.enums import Role, ShiftType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import DutyScheduleTemplate
from .repository import DutyScheduleTemplateRepository

logger = logging.getLogger(__name__)


class DutyScheduleService:
    """Admin use cases: maintain templates and assign schedules to employees."""

    def __init__(self, templates: DutyScheduleTemplateRepository, employees: EmployeeRepository):
        self._templates = templates
        self._employees = employees

    @staticmethod
    def _normalize_work_days(work_days: Iterable[str]) -> list[str]:
        days = []
        for raw in work_days or []:
            day = (raw or "").strip().lower()
            if not day:
                continue
            if day not in WEEKDAY_NAMES:
                raise ValidationError(f"Unknown weekday: {raw!r}")
            if day not in days:
                days.append(day)
        if not days:
            raise ValidationError("Select at least one work day")
        return sorted(days, key=WEEKDAY_NAMES.index)

    @staticmethod
    def _parse_shift_type(value: str | ShiftType) -> ShiftType:
        try:
            return ShiftType(value)
        except ValueError:
            raise ValidationError(f"Unknown shift type: {value!r}")

    @staticmethod
    def _require_time(value: str | time | None, field_name: str) -> time:
        parsed = parse_time_of_day(value)
        if parsed is None:
            raise ValidationError(f"{field_name} is required")
        return parsed

    def _validated(self, *, name, shift_type, start_time, end_time, work_days):
        name = require_non_empty(name, "Name")
        shift = self._parse_shift_type(shift_type)
        start = self._require_time(start_time, "Start time")
        end = self._require_time(end_time, "End time")
        if start == end:
            raise ValidationError("Start and end time must differ")
        if end < start:
            logger.debug("Template %r runs past midnight (%s-%s)", name, start, end)
        return name, shift, start, end, self._normalize_work_days(work_days)

    def list_templates(self, *, include_inactive: bool = True) -> Sequence[DutyScheduleTemplate]:
        return self._templates.list_all(include_inactive=include_inactive)

    def create_template(
        self,
        *,
        current_role: Role,
        name: str,
        shift_type: str | ShiftType,
        start_time: str | time,
        end_time: str | time,
        work_days: Iterable[str],
        is_active: bool = True,
    ) -> int:
        require_admin(current_role)
        name, shift, start, end, days = self._validated(
            name=name, shift_type=shift_type, start_time=start_time, end_time=end_time, work_days=work_days
        )
        template_id = self._templates.create(
            name=name,
            shift_type=shift,
            start_time=start,
            end_time=end,
            work_days=days,
            is_active=bool(is_active),
        )
        logger.info("Created duty schedule template %s (%s)", template_id, name)
        return template_id

    def update_template(
        self,
        *,
        current_role: Role,
        template_id: int,
        name: str,
        shift_type: str | ShiftType,
        start_time: str | time,
        end_time: str | time,
        work_days: Iterable[str],
    ) -> None:
        require_admin(current_role)
        if not self._templates.get_by_id(int(template_id)):
            raise NotFoundError("Duty schedule template not found")

        name, shift, start, end, days = self._validated(
            name=name, shift_type=shift_type, start_time=start_time, end_time=end_time, work_days=work_days
        )
        if not self._templates.update(
            template_id=int(template_id),
            name=name,
            shift_type=shift,
            start_time=start,
            end_time=end,
            work_days=days,
        ):
            raise ValidationError("Updating the template failed")
        logger.info("Updated duty schedule template %s", template_id)

    def set_active(self, *, current_role: Role, template_id: int, is_active: bool) -> None:
        require_admin(current_role)
        if not self._templates.get_by_id(int(template_id)):
            raise NotFoundError("Duty schedule template not found")
        self._templates.set_active(int(template_id), is_active=bool(is_active))
        logger.info("Duty schedule template %s active=%s", template_id, bool(is_active))

    def assign(
        self,
        *,
        current_role: Role,
        employee_id: int,
        template_id: Optional[int],
        custom_start_time: str | time | None = None,
        custom_end_time: str | time | None = None,
    ) -> None:
        """Set an employee's template and/or custom hours (None clears a field)."""

        require_admin(current_role)
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")

        if template_id is not None:
            template = self._templates.get_by_id(int(template_id))
            if not template:
                raise NotFoundError("Duty schedule template not found")
            if not template.is_active:
                raise ValidationError("Cannot assign an inactive template")

        start = parse_time_of_day(custom_start_time)
        end = parse_time_of_day(custom_end_time)
        if start is not None and end is not None and start == end:
            raise ValidationError("Custom start and end time must differ")

        self._employees.update_schedule_assignment(
            employee_id=int(employee_id),
            duty_schedule_template_id=int(template_id) if template_id is not None else None,
            custom_work_start_time=start,
            custom_work_end_time=end,
        )
        logger.info(
            "Assigned schedule to employee %s: template=%s custom=%s-%s",
            employee_id,
            template_id,
            start,
            end,
        )
