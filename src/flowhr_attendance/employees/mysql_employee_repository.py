from __future__ import annotations

from datetime import time
from typing import Optional, Sequence

from ..core.enums import WorkLocation
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, user_id, full_name, office_id, duty_schedule_template_id,
    custom_work_start_time, custom_work_end_time, work_location
"""


def _to_employee(r: dict) -> Employee:
    template_id = r.get("duty_schedule_template_id")
    office_id = r.get("office_id")
    user_id = r.get("user_id")
    return Employee(
        employee_id=int(r["employee_id"]),
        full_name=r["full_name"],
        work_location=WorkLocation(r.get("work_location") or WorkLocation.ON_SITE.value),
        office_id=int(office_id) if office_id is not None else None,
        duty_schedule_template_id=int(template_id) if template_id is not None else None,
        custom_work_start_time=normalize_mysql_time(r.get("custom_work_start_time")),
        custom_work_end_time=normalize_mysql_time(r.get("custom_work_end_time")),
        user_id=int(user_id) if user_id is not None else None,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_by_ids(self, employee_ids: Sequence[int]) -> Sequence[Employee]:
        ids = sorted({int(i) for i in employee_ids})
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE employee_id IN ({placeholders}) ORDER BY employee_id",
                tuple(ids),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def update_schedule_assignment(
        self,
        *,
        employee_id: int,
        duty_schedule_template_id: Optional[int],
        custom_work_start_time: Optional[time],
        custom_work_end_time: Optional[time],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET duty_schedule_template_id=%s, custom_work_start_time=%s, custom_work_end_time=%s
                WHERE employee_id=%s
                """,
                (
                    duty_schedule_template_id,
                    custom_work_start_time,
                    custom_work_end_time,
                    int(employee_id),
                ),
            )
            # rowcount is 0 when values are unchanged; existence is checked by the service.
            return cur.rowcount >= 0
