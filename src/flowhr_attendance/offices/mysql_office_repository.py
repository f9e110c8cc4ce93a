from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, load_json_list
from .model import OfficeSettings
from .repository import OfficeSettingsRepository


class MySQLOfficeSettingsRepository(OfficeSettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_office(self, office_id: int) -> Optional[OfficeSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT o.office_id, o.name, o.is_active,
                       s.allowed_ip_ranges, s.require_ip_whitelist, s.geo_fencing_enabled,
                       s.latitude, s.longitude, s.radius_meters
                FROM offices o
                LEFT JOIN office_settings s ON s.office_id = o.office_id
                WHERE o.office_id=%s
                """,
                (int(office_id),),
            )
            r = fetchone(cur)
            if not r:
                return None

            def _float(value) -> Optional[float]:
                return float(value) if value is not None else None

            radius = r.get("radius_meters")
            return OfficeSettings(
                office_id=int(r["office_id"]),
                office_name=r["name"],
                is_active=bool(r.get("is_active")),
                allowed_ip_ranges=tuple(str(v).strip() for v in load_json_list(r.get("allowed_ip_ranges"))),
                require_ip_whitelist=bool(r.get("require_ip_whitelist") or 0),
                geo_fencing_enabled=bool(r.get("geo_fencing_enabled") or 0),
                latitude=_float(r.get("latitude")),
                longitude=_float(r.get("longitude")),
                radius_meters=int(radius) if radius is not None else None,
            )
