from __future__ import annotations

import json
from datetime import time
from typing import Iterable, Optional, Sequence

from ..core.enums import ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_list, normalize_mysql_time
from .model import DutyScheduleTemplate
from .repository import DutyScheduleTemplateRepository


def _to_template(r: dict) -> DutyScheduleTemplate:
    return DutyScheduleTemplate(
        template_id=int(r["template_id"]),
        name=r["name"],
        shift_type=ShiftType(r["shift_type"]),
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        work_days=frozenset(str(d).lower() for d in load_json_list(r.get("work_days"))),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLDutyScheduleTemplateRepository(DutyScheduleTemplateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, template_id: int) -> Optional[DutyScheduleTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT template_id, name, shift_type, start_time, end_time, work_days, is_active
                FROM duty_schedule_templates
                WHERE template_id=%s
                """,
                (int(template_id),),
            )
            r = fetchone(cur)
            return _to_template(r) if r else None

    def list_all(self, *, include_inactive: bool = True) -> Sequence[DutyScheduleTemplate]:
        where = "" if include_inactive else "WHERE is_active=1"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT template_id, name, shift_type, start_time, end_time, work_days, is_active
                FROM duty_schedule_templates
                {where}
                ORDER BY name
                """
            )
            return [_to_template(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        name: str,
        shift_type: ShiftType,
        start_time: time,
        end_time: time,
        work_days: Iterable[str],
        is_active: bool = True,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO duty_schedule_templates(name, shift_type, start_time, end_time, work_days, is_active)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (name, shift_type.value, start_time, end_time, json.dumps(list(work_days)), int(is_active)),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        template_id: int,
        name: str,
        shift_type: ShiftType,
        start_time: time,
        end_time: time,
        work_days: Iterable[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE duty_schedule_templates
                SET name=%s, shift_type=%s, start_time=%s, end_time=%s, work_days=%s
                WHERE template_id=%s
                """,
                (name, shift_type.value, start_time, end_time, json.dumps(list(work_days)), int(template_id)),
            )
            return cur.rowcount > 0

    def set_active(self, template_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE duty_schedule_templates SET is_active=%s WHERE template_id=%s",
                (int(is_active), int(template_id)),
            )
            return cur.rowcount > 0
