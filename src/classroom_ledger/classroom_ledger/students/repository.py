from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for a teacher's roster."""

    def list_for_teacher(self, teacher_id: int) -> Sequence[Student]:
        raise NotImplementedError

    def get_or_create(self, teacher_id: int, name: str) -> Student:
        """Single conflict-resolving insert followed by a re-select."""

        raise NotImplementedError

    def create(self, teacher_id: int, name: str) -> Optional[Student]:
        """Return None when the (teacher, name) pair is already taken."""

        raise NotImplementedError

    def delete(self, teacher_id: int, name: str) -> bool:
        raise NotImplementedError
