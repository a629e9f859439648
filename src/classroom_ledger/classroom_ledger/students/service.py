from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_max_length, require_non_empty, require_positive_int
from ..core.exceptions import ValidationError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 120


def clean_student_name(name) -> str:
    return require_max_length(require_non_empty(name, "Student name"), "Student name", MAX_NAME_LENGTH)


class RosterService:
    """Use case: manage the students of one teacher."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self, teacher_id) -> Sequence[Student]:
        return self._students.list_for_teacher(require_positive_int(teacher_id, "teacherId"))

    def create_student(self, teacher_id, name) -> Student:
        teacher_id = require_positive_int(teacher_id, "teacherId")
        name = clean_student_name(name)

        student = self._students.create(teacher_id, name)
        if student is None:
            raise ValidationError(f"Student {name!r} already exists")
        logger.info("Created student %r for teacher %s", name, teacher_id)
        return student

    def delete_student(self, teacher_id, name) -> None:
        teacher_id = require_positive_int(teacher_id, "teacherId")
        name = clean_student_name(name)

        if not self._students.delete(teacher_id, name):
            raise ValidationError(f"Student {name!r} not found")
        logger.info("Deleted student %r of teacher %s", name, teacher_id)
