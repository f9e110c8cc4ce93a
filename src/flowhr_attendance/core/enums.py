from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class WorkLocation(str, Enum):
    REMOTE = "remote"
    ON_SITE = "on_site"


class ShiftType(str, Enum):
    REGULAR = "regular"
    ROTATING = "rotating"
    FLEXIBLE = "flexible"
    NIGHT = "night"


class AttendanceStatus(str, Enum):
    """Presence category stored on the attendance record."""

    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half_day"
    LEAVE = "leave"


class TimingLabel(str, Enum):
    """Derived labels; never stored."""

    EARLY_CHECK_IN = "early_check_in"
    LATE = "late"
    EARLY_CHECK_OUT = "early_check_out"


class RequestStatus(str, Enum):
    """Early-checkout review workflow state."""

    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"


class ReviewDecision(str, Enum):
    APPROVE = "approve"
    DECLINE = "decline"

    @property
    def resulting_status(self) -> RequestStatus:
        return RequestStatus.APPROVED if self is ReviewDecision.APPROVE else RequestStatus.DECLINED


class LocationState(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"
    UNKNOWN = "unknown"
