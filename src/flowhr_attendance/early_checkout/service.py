from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, parse_time_of_day
from ..common.validators import optional_text, require_admin, require_non_empty
from ..core.constants import DEFAULT_PENDING_LIMIT
from ..core.enums import RequestStatus, ReviewDecision, Role
from ..core.exceptions import AlreadyReviewed, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import EarlyCheckoutRequest
from .repository import EarlyCheckoutRepository

logger = logging.getLogger(__name__)


class EarlyCheckoutService:
    """Request/approval workflow for leaving before the scheduled end.

    Several requests for the same employee and day may coexist; every one of
    them reaches the reviewer and none supersedes another.
    """

    def __init__(self, requests: EarlyCheckoutRepository, employees: EmployeeRepository):
        self._requests = requests
        self._employees = employees

    @staticmethod
    def _parse_decision(value: str | ReviewDecision) -> ReviewDecision:
        try:
            return ReviewDecision(value)
        except ValueError:
            raise ValidationError("Decision must be 'approve' or 'decline'")

    def submit(
        self,
        *,
        employee_id: int,
        reason: str,
        requested_time: str | time,
        work_date: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> EarlyCheckoutRequest:
        now = now or now_local()
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")

        reason = require_non_empty(reason, "Reason")
        requested = parse_time_of_day(requested_time)
        if requested is None:
            raise ValidationError("Requested checkout time is required")

        request_id = self._requests.create(
            employee_id=int(employee_id),
            work_date=work_date or now.date(),
            reason=reason,
            requested_checkout_time=requested,
            created_at=now,
        )
        logger.info(
            "Early checkout request %s submitted by employee %s for %s at %s",
            request_id,
            employee_id,
            work_date or now.date(),
            requested,
        )
        return self._requests.get_by_id(request_id)

    def review(
        self,
        *,
        current_role: Role,
        reviewer_id: int,
        request_id: int,
        decision: str | ReviewDecision,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> EarlyCheckoutRequest:
        require_admin(current_role)
        decision = self._parse_decision(decision)
        now = now or now_local()

        req = self._requests.get_by_id(int(request_id))
        if not req:
            raise NotFoundError("Early checkout request not found")
        if not req.is_pending:
            raise AlreadyReviewed(f"Request was already {req.status.value}")

        decided = self._requests.decide(
            request_id=int(request_id),
            status=decision.resulting_status,
            reviewed_by=int(reviewer_id),
            reviewed_at=now,
            response_notes=optional_text(notes),
        )
        if not decided:
            # Another reviewer got there between our read and the update.
            raise AlreadyReviewed("Request was already reviewed")

        logger.info(
            "Early checkout request %s %s by %s",
            request_id,
            decision.resulting_status.value,
            reviewer_id,
        )
        return self._requests.get_by_id(int(request_id))

    def list_for_employee(self, employee_id: int, *, limit: int = 50) -> Sequence[EarlyCheckoutRequest]:
        return self._requests.list_for_employee(int(employee_id), limit=limit)

    def list_pending(self, *, current_role: Role, limit: int = DEFAULT_PENDING_LIMIT) -> Sequence[EarlyCheckoutRequest]:
        require_admin(current_role)
        return self._requests.list_by_status(RequestStatus.PENDING, limit=limit)

    def list_for_date(
        self, work_date: date, *, status: Optional[RequestStatus] = None
    ) -> Sequence[EarlyCheckoutRequest]:
        return self._requests.list_for_date(work_date, status=status)

    def approved_for(self, employee_id: int, work_date: date) -> Sequence[EarlyCheckoutRequest]:
        return [
            r
            for r in self._requests.list_for_date(work_date, status=RequestStatus.APPROVED)
            if r.employee_id == int(employee_id)
        ]
