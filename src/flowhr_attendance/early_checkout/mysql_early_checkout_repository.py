from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Sequence

from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import EarlyCheckoutRequest
from .repository import EarlyCheckoutRepository

_COLUMNS = """
    request_id, employee_id, work_date, reason, requested_checkout_time,
    status, created_at, reviewed_at, reviewed_by, response_notes
"""


def _to_request(r: dict) -> EarlyCheckoutRequest:
    reviewed_by = r.get("reviewed_by")
    return EarlyCheckoutRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        reason=r["reason"],
        requested_checkout_time=normalize_mysql_time(r["requested_checkout_time"]),
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        reviewed_at=r.get("reviewed_at"),
        reviewed_by=int(reviewed_by) if reviewed_by is not None else None,
        response_notes=r.get("response_notes"),
    )


class MySQLEarlyCheckoutRepository(EarlyCheckoutRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        reason: str,
        requested_checkout_time: time,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO early_checkout_requests(
                    employee_id, work_date, reason, requested_checkout_time, status, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    work_date,
                    reason,
                    requested_checkout_time,
                    RequestStatus.PENDING.value,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[EarlyCheckoutRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM early_checkout_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_for_employee(self, employee_id: int, *, limit: int = 50) -> Sequence[EarlyCheckoutRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM early_checkout_requests
                WHERE employee_id=%s
                ORDER BY created_at DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_for_date(
        self, work_date: date, *, status: Optional[RequestStatus] = None
    ) -> Sequence[EarlyCheckoutRequest]:
        clauses = ["work_date=%s"]
        params: list[object] = [work_date]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM early_checkout_requests
                WHERE {" AND ".join(clauses)}
                ORDER BY created_at ASC
                """,
                tuple(params),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_by_status(self, status: RequestStatus, *, limit: int = 500) -> Sequence[EarlyCheckoutRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM early_checkout_requests
                WHERE status=%s
                ORDER BY work_date ASC, created_at ASC
                LIMIT %s
                """,
                (status.value, int(limit)),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        reviewed_by: int,
        reviewed_at: datetime,
        response_notes: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE early_checkout_requests
                SET status=%s, reviewed_by=%s, reviewed_at=%s, response_notes=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(reviewed_by),
                    reviewed_at,
                    response_notes,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0
