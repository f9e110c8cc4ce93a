from __future__ import annotations

from datetime import time
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import ShiftType
from .model import DutyScheduleTemplate


class DutyScheduleTemplateRepository(Protocol):
    def get_by_id(self, template_id: int) -> Optional[DutyScheduleTemplate]:
        raise NotImplementedError

    def list_all(self, *, include_inactive: bool = True) -> Sequence[DutyScheduleTemplate]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        shift_type: ShiftType,
        start_time: time,
        end_time: time,
        work_days: Iterable[str],
        is_active: bool = True,
    ) -> int:
        """Insert a template and return its id."""

        raise NotImplementedError

    def update(
        self,
        *,
        template_id: int,
        name: str,
        shift_type: ShiftType,
        start_time: time,
        end_time: time,
        work_days: Iterable[str],
    ) -> bool:
        raise NotImplementedError

    def set_active(self, template_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError
