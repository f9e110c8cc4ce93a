from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced employee, template or request does not exist."""


class DataAnomalyError(DomainError):
    """Raised when computed data is inconsistent (e.g. check-out before check-in)."""


class StateConflictError(DomainError):
    """Raised when an action does not fit the current record/request state."""


class AlreadyCheckedIn(StateConflictError):
    pass


class AlreadyCheckedOut(StateConflictError):
    pass


class NotCheckedIn(StateConflictError):
    pass


class BreakAlreadyStarted(StateConflictError):
    pass


class BreakNotStarted(StateConflictError):
    pass


class AlreadyReviewed(StateConflictError):
    pass


class LocationDeniedError(DomainError):
    """Raised when a gated mutation is attempted from a non-authorized location.

    The gate itself never raises; this only wraps its negative result at the
    point where a mutation has to be refused.
    """

    def __init__(self, check: Any):
        super().__init__(check.reason or "Attendance cannot be marked from this location")
        self.check = check
