from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, normalize_mysql_time
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, work_date, in_time, out_time, status,
    check_in_at, check_out_at, check_in_ip, check_out_ip,
    break_start_at, break_total_minutes, total_worked_minutes, notes
"""


def _to_record(r: dict) -> AttendanceRecord:
    worked = r.get("total_worked_minutes")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        in_time=normalize_mysql_time(r.get("in_time")),
        out_time=normalize_mysql_time(r.get("out_time")),
        status=AttendanceStatus(r["status"]),
        check_in_at=r.get("check_in_at"),
        check_out_at=r.get("check_out_at"),
        check_in_ip=r.get("check_in_ip"),
        check_out_ip=r.get("check_out_ip"),
        break_start_at=r.get("break_start_at"),
        break_total_minutes=int(r.get("break_total_minutes") or 0),
        total_worked_minutes=int(worked) if worked is not None else None,
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE work_date=%s ORDER BY created_at DESC",
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        in_time: time,
        check_in_at: datetime,
        check_in_ip: Optional[str],
        status: AttendanceStatus,
    ) -> Optional[int]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(
                        employee_id, work_date, in_time, check_in_at, check_in_ip,
                        status, break_total_minutes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,0)
                    """,
                    (int(employee_id), work_date, in_time, check_in_at, check_in_ip, status.value),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            # uq_attendance_employee_date: a concurrent submission won the race.
            if is_duplicate_key(e):
                return None
            raise

    def set_checkin(
        self,
        *,
        attendance_id: int,
        in_time: time,
        check_in_at: datetime,
        check_in_ip: Optional[str],
        status: AttendanceStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET in_time=%s, check_in_at=%s, check_in_ip=%s, status=%s,
                    break_start_at=NULL, break_total_minutes=0, total_worked_minutes=NULL
                WHERE attendance_id=%s AND in_time IS NULL
                """,
                (in_time, check_in_at, check_in_ip, status.value, int(attendance_id)),
            )
            return cur.rowcount > 0

    def update_checkout(
        self,
        *,
        attendance_id: int,
        out_time: time,
        check_out_at: datetime,
        check_out_ip: Optional[str],
        break_total_minutes: int,
        total_worked_minutes: int,
        status: AttendanceStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET out_time=%s, check_out_at=%s, check_out_ip=%s,
                    break_start_at=NULL, break_total_minutes=%s,
                    total_worked_minutes=%s, status=%s
                WHERE attendance_id=%s AND in_time IS NOT NULL AND out_time IS NULL
                """,
                (
                    out_time,
                    check_out_at,
                    check_out_ip,
                    int(break_total_minutes),
                    int(total_worked_minutes),
                    status.value,
                    int(attendance_id),
                ),
            )
            return cur.rowcount > 0

    def start_break(self, *, attendance_id: int, break_start_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance SET break_start_at=%s
                WHERE attendance_id=%s AND break_start_at IS NULL
                  AND in_time IS NOT NULL AND out_time IS NULL
                """,
                (break_start_at, int(attendance_id)),
            )
            return cur.rowcount > 0

    def end_break(self, *, attendance_id: int, break_total_minutes: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance SET break_start_at=NULL, break_total_minutes=%s
                WHERE attendance_id=%s AND break_start_at IS NOT NULL AND out_time IS NULL
                """,
                (int(break_total_minutes), int(attendance_id)),
            )
            return cur.rowcount > 0

    def admin_upsert(
        self,
        *,
        employee_id: int,
        work_date: date,
        in_time: Optional[time],
        out_time: Optional[time],
        check_in_at: Optional[datetime],
        check_out_at: Optional[datetime],
        total_worked_minutes: Optional[int],
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(
                    employee_id, work_date, in_time, out_time, check_in_at, check_out_at,
                    total_worked_minutes, status, notes, break_total_minutes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,0)
                ON DUPLICATE KEY UPDATE
                    attendance_id=LAST_INSERT_ID(attendance_id),
                    in_time=VALUES(in_time),
                    out_time=VALUES(out_time),
                    check_in_at=VALUES(check_in_at),
                    check_out_at=VALUES(check_out_at),
                    total_worked_minutes=VALUES(total_worked_minutes),
                    status=VALUES(status),
                    notes=VALUES(notes),
                    break_start_at=NULL
                """,
                (
                    int(employee_id),
                    work_date,
                    in_time,
                    out_time,
                    check_in_at,
                    check_out_at,
                    total_worked_minutes,
                    status.value,
                    notes,
                ),
            )
            return int(cur.lastrowid)
