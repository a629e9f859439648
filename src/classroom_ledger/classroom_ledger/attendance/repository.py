from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRow


class AttendanceRepository(Protocol):
    def upsert(self, *, student_id: int, work_date: date, status: AttendanceStatus) -> None:
        """Insert the fact, or overwrite the status of the existing one, in one statement."""

        raise NotImplementedError

    def list_for_teacher(self, teacher_id: int) -> Sequence[AttendanceRow]:
        raise NotImplementedError

    def list_for_teacher_on(self, teacher_id: int, work_date: date) -> Sequence[AttendanceRow]:
        raise NotImplementedError
