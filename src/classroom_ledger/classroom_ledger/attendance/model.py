from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model joined with the student name (teacher overview)."""

    student_name: str
    work_date: date
    status: AttendanceStatus


@dataclass(frozen=True)
class StudentDayStatus:
    name: str
    status: Optional[AttendanceStatus]

    def to_dict(self) -> dict:
        return {"name": self.name, "status": self.status.value if self.status else None}
