from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import PointsUpdate, StudentPoints
from .repository import PointsRepository


class MySQLPointsRepository(PointsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_teacher(self, teacher_id: int) -> Sequence[StudentPoints]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT name, points
                FROM students
                WHERE teacher_id=%s
                ORDER BY name ASC
                """,
                (int(teacher_id),),
            )
            return [StudentPoints(name=r["name"], points=int(r["points"])) for r in fetchall(cur)]

    def apply_batch(self, teacher_id: int, updates: Sequence[PointsUpdate]) -> int:
        changed = 0
        with db_cursor(self._conn_factory) as (_, cur):
            for update in updates:
                cur.execute(
                    """
                    UPDATE students
                    SET points=%s
                    WHERE teacher_id=%s AND name=%s
                    """,
                    (int(update.points), int(teacher_id), update.name),
                )
                changed += max(cur.rowcount, 0)
        return changed
