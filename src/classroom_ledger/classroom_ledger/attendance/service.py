from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List

from ..common.datetime_utils import parse_iso_date, today_utc
from ..common.validators import require_positive_int
from ..core.constants import ATTENDANCE_LOCK_KEY
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..locks.service import LockGate
from ..students.repository import StudentRepository
from ..students.service import clean_student_name
from .model import StudentDayStatus
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def parse_status(value) -> AttendanceStatus:
    try:
        return AttendanceStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"Invalid status {value!r}, expected one of: {allowed}")


def _as_date(value) -> date:
    if isinstance(value, date):
        return value
    return parse_iso_date(value)


class AttendanceService:
    """Use cases: record a daily attendance fact and read a class's history."""

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository, lock_gate: LockGate):
        self._attendance = attendance
        self._students = students
        self._lock_gate = lock_gate

    def record_attendance(self, teacher_id, student_name, status, work_date=None) -> None:
        teacher_id = require_positive_int(teacher_id, "teacherId")
        student_name = clean_student_name(student_name)
        status = parse_status(status)
        work_date = _as_date(work_date) if work_date else today_utc()

        # Checked right before the first write; nothing is provisioned while locked.
        self._lock_gate.ensure_unlocked(ATTENDANCE_LOCK_KEY)

        student = self._students.get_or_create(teacher_id, student_name)
        self._attendance.upsert(student_id=student.student_id, work_date=work_date, status=status)
        logger.debug("Attendance %s %s=%s (teacher %s)", student_name, work_date, status.value, teacher_id)

    def get_attendance_for_teacher(self, teacher_id) -> Dict[str, Dict[str, str]]:
        teacher_id = require_positive_int(teacher_id, "teacherId")

        out: Dict[str, Dict[str, str]] = {}
        for row in self._attendance.list_for_teacher(teacher_id):
            out.setdefault(row.student_name, {})[row.work_date.strftime("%Y-%m-%d")] = row.status.value
        return out

    def get_students_with_attendance(self, teacher_id, work_date) -> List[StudentDayStatus]:
        teacher_id = require_positive_int(teacher_id, "teacherId")
        if not work_date:
            raise ValidationError("date is required")
        day = _as_date(work_date)

        by_name: Dict[str, AttendanceStatus] = {
            r.student_name: r.status for r in self._attendance.list_for_teacher_on(teacher_id, day)
        }
        return [
            StudentDayStatus(name=s.name, status=by_name.get(s.name))
            for s in self._students.list_for_teacher(teacher_id)
        ]
