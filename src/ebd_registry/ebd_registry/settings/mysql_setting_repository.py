from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SystemSetting
from .repository import SettingRepository


class MySQLSettingRepository(SettingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[SystemSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT `key`, value FROM system_settings WHERE `key`=%s", (key,))
            r = fetchone(cur)
            if not r:
                return None
            return SystemSetting(key=r["key"], value=bool(r["value"]))

    def upsert(self, key: str, value: bool) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO system_settings(`key`, value)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE value=VALUES(value)
                """,
                (key, 1 if value else 0),
            )
