from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import StatusPolicyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.review import AttendanceReviewService
from .attendance.service import AttendanceService
from .attendance.strategies.base import StatusPolicy
from .core.constants import DEFAULT_GEOFENCE_RADIUS_METERS
from .database.connection import DBConfig, DatabaseConnection
from .early_checkout.mysql_early_checkout_repository import MySQLEarlyCheckoutRepository
from .early_checkout.repository import EarlyCheckoutRepository
from .early_checkout.service import EarlyCheckoutService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .location.gate import LocationGate
from .location.origin import HttpOriginLookup, OriginLookup, RequestOriginLookup
from .offices.mysql_office_repository import MySQLOfficeSettingsRepository
from .offices.repository import OfficeSettingsRepository
from .schedules.mysql_schedule_repository import MySQLDutyScheduleTemplateRepository
from .schedules.repository import DutyScheduleTemplateRepository
from .schedules.resolver import ScheduleResolver
from .schedules.service import DutyScheduleService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    templates_repo: DutyScheduleTemplateRepository
    offices_repo: OfficeSettingsRepository
    attendance_repo: AttendanceRepository
    early_checkout_repo: EarlyCheckoutRepository

    schedule_resolver: ScheduleResolver
    location_gate: LocationGate
    duty_schedule_service: DutyScheduleService
    attendance_service: AttendanceService
    early_checkout_service: EarlyCheckoutService
    review_service: AttendanceReviewService


def wire_container(
    *,
    employees_repo: EmployeeRepository,
    templates_repo: DutyScheduleTemplateRepository,
    offices_repo: OfficeSettingsRepository,
    attendance_repo: AttendanceRepository,
    early_checkout_repo: EarlyCheckoutRepository,
    origin_lookup: OriginLookup,
    status_policy: StatusPolicy | None = None,
    default_radius_meters: int = DEFAULT_GEOFENCE_RADIUS_METERS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build the services on top of the given repositories (MySQL or in-memory)."""

    schedule_resolver = ScheduleResolver(templates_repo, employees_repo)
    location_gate = LocationGate(
        offices_repo,
        origin_lookup,
        employees_repo,
        default_radius_meters=default_radius_meters,
    )
    duty_schedule_service = DutyScheduleService(templates_repo, employees_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        location_gate,
        schedule_resolver,
        status_policy=status_policy,
    )
    early_checkout_service = EarlyCheckoutService(early_checkout_repo, employees_repo)
    review_service = AttendanceReviewService(
        attendance_repo,
        employees_repo,
        schedule_resolver,
        early_checkout_service,
        location_gate,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        templates_repo=templates_repo,
        offices_repo=offices_repo,
        attendance_repo=attendance_repo,
        early_checkout_repo=early_checkout_repo,
        schedule_resolver=schedule_resolver,
        location_gate=location_gate,
        duty_schedule_service=duty_schedule_service,
        attendance_service=attendance_service,
        early_checkout_service=early_checkout_service,
        review_service=review_service,
    )


def build_origin_lookup(settings) -> OriginLookup:
    mode = str(getattr(settings, "ORIGIN_LOOKUP", "request")).strip().lower()
    if mode == "http":
        return HttpOriginLookup(
            getattr(settings, "ORIGIN_LOOKUP_URL"),
            timeout_seconds=float(getattr(settings, "ORIGIN_LOOKUP_TIMEOUT_SECONDS", 5.0)),
        )
    if mode == "request":
        return RequestOriginLookup(trust_proxy_headers=bool(getattr(settings, "TRUST_PROXY_HEADERS", False)))
    raise ValueError(f"Unknown ORIGIN_LOOKUP: {mode!r}")


def build_container(*, db_config: dict, settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    policy = StatusPolicyFactory(
        half_day_threshold_minutes=int(getattr(settings, "HALF_DAY_THRESHOLD_MINUTES", 240))
    ).for_name(getattr(settings, "STATUS_POLICY", "presence"))

    return wire_container(
        employees_repo=MySQLEmployeeRepository(conn),
        templates_repo=MySQLDutyScheduleTemplateRepository(conn),
        offices_repo=MySQLOfficeSettingsRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        early_checkout_repo=MySQLEarlyCheckoutRepository(conn),
        origin_lookup=build_origin_lookup(settings),
        status_policy=policy,
        default_radius_meters=int(getattr(settings, "DEFAULT_GEOFENCE_RADIUS", DEFAULT_GEOFENCE_RADIUS_METERS)),
        conn=conn,
    )
