from __future__ import annotations

from datetime import time
from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Read access to employees plus the schedule assignment columns.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_by_ids(self, employee_ids: Sequence[int]) -> Sequence[Employee]:
        raise NotImplementedError

    def update_schedule_assignment(
        self,
        *,
        employee_id: int,
        duty_schedule_template_id: Optional[int],
        custom_work_start_time: Optional[time],
        custom_work_end_time: Optional[time],
    ) -> bool:
        raise NotImplementedError
