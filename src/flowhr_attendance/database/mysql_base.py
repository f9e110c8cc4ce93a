"""Small helpers shared by the MySQL repositories."""

from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, Iterator, List, Optional, Tuple

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..common.datetime_utils import parse_time_of_day
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    """One connection per unit of work: commit on success, roll back on any error."""

    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def is_duplicate_key(exc: IntegrityError) -> bool:
    return getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns arrive as time, timedelta (C extension) or 'HH:MM:SS' text."""

    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return time(seconds // 3600, (seconds // 60) % 60, seconds % 60)
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("ascii")
    if isinstance(value, str):
        return parse_time_of_day(value)
    raise TypeError(f"Unsupported MySQL TIME value: {value!r}")


def load_json_list(value: Any) -> list:
    """JSON columns come back as text (pure-Python connector) or already decoded."""

    if value is None:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value) if value.strip() else []
    return list(value)
