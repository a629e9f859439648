from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PointsUpdate:
    """One already-clamped entry of a points batch (transient, never stored)."""

    name: str
    points: int


@dataclass(frozen=True)
class StudentPoints:
    name: str
    points: int

    def to_dict(self) -> dict:
        return {"name": self.name, "points": self.points}
