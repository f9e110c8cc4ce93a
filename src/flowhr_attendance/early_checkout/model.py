from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import format_time
from ..core.enums import RequestStatus


@dataclass(frozen=True)
class EarlyCheckoutRequest:
    """An employee's request to leave before the scheduled end of the day.

    Status only moves pending -> approved | declined.
    """

    request_id: int
    employee_id: int
    work_date: date
    reason: str
    requested_checkout_time: time
    status: RequestStatus
    created_at: datetime
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[int] = None
    response_notes: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "employee_id": self.employee_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "reason": self.reason,
            "requested_checkout_time": format_time(self.requested_checkout_time),
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "reviewed_at": self.reviewed_at.isoformat() if self.reviewed_at else None,
            "reviewed_by": self.reviewed_by,
            "response_notes": self.response_notes,
        }
