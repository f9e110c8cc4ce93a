"""Apply ``database/schema.sql`` to the configured MySQL server.

The script is idempotent (``CREATE TABLE IF NOT EXISTS``); it is run on app
start when AUTO_INIT_DB is set, or by ``scripts/init_db.py``.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

# Database selection comes from DB_CONFIG, never from the script.
_DB_SELECTION = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")
# One statement: any run of quoted strings or non-';' characters.
_STATEMENT = re.compile(r"""(?:'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|[^;'"])+""", re.S)


def split_statements(sql: str) -> Iterator[str]:
    """Yield the executable statements of a schema script.

    Full-line ``--`` comments and CREATE DATABASE / USE statements are
    dropped; semicolons inside quoted literals do not end a statement.
    """

    sql = _LINE_COMMENT.sub("", _DB_SELECTION.sub("", sql))
    for match in _STATEMENT.finditer(sql):
        statement = match.group(0).strip()
        if statement:
            yield statement


def _factory(db_config: dict) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_dict(db_config))


def ensure_database_exists(db_config: dict) -> None:
    factory = _factory(db_config)
    conn = factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Create the database if needed and run every schema statement; returns the count."""

    ensure_database_exists(db_config)
    statements = list(split_statements(Path(schema_path).read_text(encoding="utf-8")))

    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor()
        for statement in statements:
            cur.execute(statement)
        conn.commit()
    finally:
        conn.close()

    logger.info("Applied %d schema statements from %s", len(statements), schema_path)
    return len(statements)


def list_tables(db_config: dict) -> list[str]:
    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()
