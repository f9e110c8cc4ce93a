from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 10

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        """Build from the DB_CONFIG settings mapping, filling local defaults."""

        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "flowhr_attendance")),
            connect_timeout=int(db_config.get("connect_timeout", 10)),
        )


class DatabaseConnection:
    """Hands out short-lived MySQL connections to the repositories.

    Every repository call opens its own connection and commits on its own,
    so no connection outlives a request.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = cls(config)
        return cls._instance

    def connect(self, *, with_database: bool = True):
        params = asdict(self._config)
        params["connection_timeout"] = params.pop("connect_timeout")
        if not with_database:
            params.pop("database")
        return mysql.connector.connect(charset="utf8mb4", **params)
