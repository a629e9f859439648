"""Login-streak state machine.

Pure functions only: the caller supplies the previous state and the current
time and persists whatever comes back.
"""
from __future__ import annotations

from datetime import datetime, timedelta

from ..common.datetime_utils import as_naive_utc
from ..core.constants import STREAK_CONTINUE_HOURS, STREAK_DAYS_PER_LEVEL, STREAK_RESET_HOURS
from .model import StreakState

CONTINUE_AFTER = timedelta(hours=STREAK_CONTINUE_HOURS)
RESET_AFTER = timedelta(hours=STREAK_RESET_HOURS)


def next_streak(previous: StreakState, now: datetime) -> StreakState:
    """Compute the state after one successful login at ``now``.

    ========================  ==================
    elapsed since last login  streak
    ========================  ==================
    never logged in           1
    >= 48h                    1 (missed a day)
    24h .. 48h                previous + 1
    < 24h                     previous
    ========================  ==================

    A negative gap (clock skew) counts as "< 24h". ``last_login_at`` always
    moves to ``now`` and ``best_streak`` never decreases.
    """

    now = as_naive_utc(now).replace(microsecond=0)
    last = previous.last_login_at

    if last is None:
        count = 1
    else:
        elapsed = now - as_naive_utc(last)
        if elapsed >= RESET_AFTER:
            count = 1
        elif elapsed >= CONTINUE_AFTER:
            count = previous.streak_count + 1
        else:
            count = max(previous.streak_count, 1)

    return StreakState(
        last_login_at=now,
        streak_count=count,
        best_streak=max(previous.best_streak, count),
    )


def level_for(streak_count: int) -> int:
    return 1 + max(streak_count, 0) // STREAK_DAYS_PER_LEVEL
