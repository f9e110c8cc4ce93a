from __future__ import annotations

import ipaddress
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.constants import DEFAULT_GEOFENCE_RADIUS_METERS
from ..core.enums import LocationState
from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..offices.repository import OfficeSettingsRepository
from .geo import GeoPosition, haversine_distance_meters
from .origin import OriginLookup, normalize_ip

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationCheck:
    """Outcome of the location gate, shown to the user as-is.

    A denial is a normal result; ``reason`` explains it.
    """

    state: LocationState
    reason: Optional[str] = None
    office_name: Optional[str] = None
    current_ip: Optional[str] = None
    ip_allowed: bool = False
    geo_allowed: bool = False
    distance_meters: Optional[float] = None
    bypassed: bool = False

    @property
    def is_allowed(self) -> bool:
        return self.state == LocationState.ALLOWED

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "is_allowed": self.is_allowed,
            "reason": self.reason,
            "office_name": self.office_name,
            "current_ip": self.current_ip,
            "ip_allowed": self.ip_allowed,
            "geo_allowed": self.geo_allowed,
            "distance_meters": round(self.distance_meters, 1) if self.distance_meters is not None else None,
            "bypassed": self.bypassed,
        }


def ip_in_ranges(ip: str, allowed_ranges: Iterable[str]) -> bool:
    """True if ``ip`` matches any entry; entries are CIDR blocks or exact addresses."""

    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return False

    for entry in allowed_ranges:
        entry = (entry or "").strip()
        if not entry:
            continue
        try:
            network = ipaddress.ip_network(entry, strict=False)
        except ValueError:
            logger.debug("Skipping malformed allow-list entry %r", entry)
            continue
        if addr in network:
            return True
    return False


class LocationGate:
    """Decide whether an employee may record attendance from where they are.

    Remote employees are never gated. For on-site employees the rules come
    from their office's settings, loaded per call.
    """

    def __init__(
        self,
        offices: OfficeSettingsRepository,
        origin_lookup: OriginLookup,
        employees: EmployeeRepository | None = None,
        *,
        default_radius_meters: int = DEFAULT_GEOFENCE_RADIUS_METERS,
    ):
        self._offices = offices
        self._origin_lookup = origin_lookup
        self._employees = employees
        self._default_radius = int(default_radius_meters)

    def is_authorized(
        self, employee: Employee, current_origin: Optional[str], *, position: GeoPosition | None = None
    ) -> bool:
        return self.evaluate(employee, current_origin, position=position).is_allowed

    def evaluate(
        self, employee: Employee, current_origin: Optional[str], *, position: GeoPosition | None = None
    ) -> LocationCheck:
        if employee.is_remote:
            return LocationCheck(
                state=LocationState.ALLOWED,
                current_ip=normalize_ip(current_origin),
                ip_allowed=True,
                geo_allowed=True,
                bypassed=True,
            )

        if employee.office_id is None:
            return LocationCheck(state=LocationState.DENIED, reason="No office assigned. Please contact admin.")

        settings = self._offices.get_for_office(employee.office_id)
        if settings is None:
            return LocationCheck(state=LocationState.DENIED, reason="Office not found. Please contact admin.")

        if not settings.is_active:
            return LocationCheck(
                state=LocationState.DENIED,
                reason="Office is inactive. Attendance cannot be marked.",
                office_name=settings.office_name,
            )

        ip = normalize_ip(current_origin)
        if ip is None:
            return LocationCheck(
                state=LocationState.UNKNOWN,
                reason="Failed to verify your network location.",
                office_name=settings.office_name,
            )

        ip_allowed = not settings.require_ip_whitelist or ip_in_ranges(ip, settings.allowed_ip_ranges)

        geo_allowed = not settings.geo_fencing_enabled
        distance = None
        if settings.geo_fencing_enabled:
            if position is not None and settings.latitude is not None and settings.longitude is not None:
                distance = haversine_distance_meters(
                    position.latitude, position.longitude, settings.latitude, settings.longitude
                )
                radius = settings.radius_meters if settings.radius_meters is not None else self._default_radius
                geo_allowed = distance <= radius

        if ip_allowed and geo_allowed:
            return LocationCheck(
                state=LocationState.ALLOWED,
                office_name=settings.office_name,
                current_ip=ip,
                ip_allowed=True,
                geo_allowed=True,
                distance_meters=distance,
            )

        if not ip_allowed:
            reason = "Your network is not allowed for this office."
        else:
            reason = "You are outside the allowed office location."
        return LocationCheck(
            state=LocationState.DENIED,
            reason=reason,
            office_name=settings.office_name,
            current_ip=ip,
            ip_allowed=ip_allowed,
            geo_allowed=geo_allowed,
            distance_meters=distance,
        )

    def check(self, employee: Employee, *, position: GeoPosition | None = None) -> LocationCheck:
        """Look up the caller's origin and evaluate it."""

        if employee.is_remote:
            # The gate is skipped entirely; no origin lookup for remote staff.
            return self.evaluate(employee, None, position=position)

        origin = self._origin_lookup.current_origin()
        result = self.evaluate(employee, origin, position=position)
        if not result.is_allowed:
            logger.info(
                "Location %s for employee %s (ip=%s): %s",
                result.state.value,
                employee.employee_id,
                result.current_ip,
                result.reason,
            )
        return result

    def check_employee(self, employee_id: int, *, position: GeoPosition | None = None) -> LocationCheck:
        if self._employees is None:
            raise RuntimeError("LocationGate was built without an employee repository")
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return self.check(employee, position=position)
