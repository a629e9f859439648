from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization checks."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Daily attendance status as stored in the database."""

    PRESENT = "Present"
    ABSENT = "Absent"
