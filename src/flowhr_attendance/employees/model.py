from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.enums import WorkLocation


@dataclass(frozen=True)
class Employee:
    """Domain entity: the attendance-relevant slice of an employee profile.

    Note: Employees are owned by the HR module; this package only reads them
    and updates the schedule assignment fields.
    """

    employee_id: int
    full_name: str
    work_location: WorkLocation = WorkLocation.ON_SITE
    office_id: Optional[int] = None
    duty_schedule_template_id: Optional[int] = None
    custom_work_start_time: Optional[time] = None
    custom_work_end_time: Optional[time] = None
    user_id: Optional[int] = None

    @property
    def is_remote(self) -> bool:
        return self.work_location == WorkLocation.REMOTE

    @property
    def has_custom_hours(self) -> bool:
        return self.custom_work_start_time is not None or self.custom_work_end_time is not None
