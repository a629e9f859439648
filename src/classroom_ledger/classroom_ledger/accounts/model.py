from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class StreakState:
    """Persisted login-streak fields of an account."""

    last_login_at: Optional[datetime] = None
    streak_count: int = 0
    best_streak: int = 0


@dataclass(frozen=True)
class Account:
    """Domain entity: a teacher, student or admin login.

    For teachers, ``account_id`` is also the partition key of their students.
    """

    account_id: int
    username: str
    password_hash: str
    role: Role
    streak: StreakState = StreakState()


@dataclass(frozen=True)
class LoginResult:
    account_id: int
    username: str
    role: Role
    streak_count: int
    best_streak: int
    level: int
    last_login_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.account_id,
            "username": self.username,
            "role": self.role.value,
            "streakCount": self.streak_count,
            "bestStreak": self.best_streak,
            "level": self.level,
            "lastLoginAt": self.last_login_at.isoformat(),
        }
