from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRow
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, *, student_id: int, work_date: date, status: AttendanceStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(student_id, work_date, status)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                (int(student_id), work_date, status.value),
            )

    def list_for_teacher(self, teacher_id: int) -> Sequence[AttendanceRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.name, ar.work_date, ar.status
                FROM attendance_records ar
                JOIN students s ON s.student_id = ar.student_id
                WHERE s.teacher_id=%s
                ORDER BY s.name, ar.work_date
                """,
                (int(teacher_id),),
            )
            return [self._to_row(r) for r in fetchall(cur)]

    def list_for_teacher_on(self, teacher_id: int, work_date: date) -> Sequence[AttendanceRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.name, ar.work_date, ar.status
                FROM attendance_records ar
                JOIN students s ON s.student_id = ar.student_id
                WHERE s.teacher_id=%s AND ar.work_date=%s
                """,
                (int(teacher_id), work_date),
            )
            return [self._to_row(r) for r in fetchall(cur)]

    @staticmethod
    def _to_row(r: dict) -> AttendanceRow:
        return AttendanceRow(
            student_name=r["name"],
            work_date=r["work_date"],
            status=AttendanceStatus(r["status"]),
        )
