from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import LockState
from .repository import LockRepository


class MySQLLockRepository(LockRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, resource_key: str) -> Optional[LockState]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT resource_key, locked FROM lock_states WHERE resource_key=%s",
                (resource_key,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return LockState(resource_key=r["resource_key"], locked=bool(r["locked"]))

    def set(self, resource_key: str, locked: bool) -> LockState:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO lock_states(resource_key, locked)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE locked=VALUES(locked)
                """,
                (resource_key, bool(locked)),
            )
            return LockState(resource_key=resource_key, locked=bool(locked))
