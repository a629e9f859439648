from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_COLUMNS = "student_id, teacher_id, name, points"


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        teacher_id=int(r["teacher_id"]),
        name=r["name"],
        points=int(r.get("points") or 0),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_teacher(self, teacher_id: int) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE teacher_id=%s ORDER BY name",
                (int(teacher_id),),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def get_or_create(self, teacher_id: int, name: str) -> Student:
        with db_cursor(self._conn_factory) as (_, cur):
            # No-op update on collision: concurrent first marks never fail on the unique key.
            cur.execute(
                """
                INSERT INTO students(teacher_id, name, points)
                VALUES(%s,%s,0)
                ON DUPLICATE KEY UPDATE name=name
                """,
                (int(teacher_id), name),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE teacher_id=%s AND name=%s",
                (int(teacher_id), name),
            )
            return _to_student(fetchone(cur))

    def create(self, teacher_id: int, name: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(teacher_id, name, points)
                VALUES(%s,%s,0)
                ON DUPLICATE KEY UPDATE name=name
                """,
                (int(teacher_id), name),
            )
            # rowcount is 1 for a fresh insert, 0 when the key already existed.
            if cur.rowcount != 1:
                return None
            return Student(student_id=int(cur.lastrowid), teacher_id=int(teacher_id), name=name, points=0)

    def delete(self, teacher_id: int, name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM students WHERE teacher_id=%s AND name=%s",
                (int(teacher_id), name),
            )
            return cur.rowcount > 0
