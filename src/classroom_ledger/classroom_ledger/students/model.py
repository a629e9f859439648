from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Student:
    """Roster entry owned by exactly one teacher.

    ``points`` is only ever written through the points ledger.
    """

    student_id: int
    teacher_id: int
    name: str
    points: int = 0
