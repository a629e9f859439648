from __future__ import annotations

from typing import Protocol, Sequence

from .model import PointsUpdate, StudentPoints


class PointsRepository(Protocol):
    def list_for_teacher(self, teacher_id: int) -> Sequence[StudentPoints]:
        raise NotImplementedError

    def apply_batch(self, teacher_id: int, updates: Sequence[PointsUpdate]) -> int:
        """Write every update inside one transaction; all or nothing.

        Returns the number of rows changed. Names that match no student of
        ``teacher_id`` change nothing.
        """

        raise NotImplementedError
