from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import EarlyCheckoutRequest


class EarlyCheckoutRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        reason: str,
        requested_checkout_time: time,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[EarlyCheckoutRequest]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, limit: int = 50) -> Sequence[EarlyCheckoutRequest]:
        raise NotImplementedError

    def list_for_date(
        self, work_date: date, *, status: Optional[RequestStatus] = None
    ) -> Sequence[EarlyCheckoutRequest]:
        raise NotImplementedError

    def list_by_status(self, status: RequestStatus, *, limit: int = 500) -> Sequence[EarlyCheckoutRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        reviewed_by: int,
        reviewed_at: datetime,
        response_notes: Optional[str] = None,
    ) -> bool:
        """Move a pending request to a terminal status; False if it was not pending."""

        raise NotImplementedError
