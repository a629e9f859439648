from __future__ import annotations

from typing import Callable, Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Account, StreakState
from .repository import AccountRepository

_COLUMNS = "account_id, username, password_hash, role, last_login_at, streak_count, best_streak"


def _to_streak(r: dict) -> StreakState:
    return StreakState(
        last_login_at=r.get("last_login_at"),
        streak_count=int(r.get("streak_count") or 0),
        best_streak=int(r.get("best_streak") or 0),
    )


def _to_account(r: dict) -> Account:
    return Account(
        account_id=int(r["account_id"]),
        username=r["username"],
        password_hash=r["password_hash"],
        role=Role(r["role"]),
        streak=_to_streak(r),
    )


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, account_id: int) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM accounts WHERE account_id=%s", (int(account_id),))
            r = fetchone(cur)
            return _to_account(r) if r else None

    def get_by_username(self, username: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM accounts WHERE username=%s", (username,))
            r = fetchone(cur)
            return _to_account(r) if r else None

    def update_streak(
        self,
        account_id: int,
        transition: Callable[[StreakState], StreakState],
    ) -> Optional[StreakState]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Row lock held until commit; a concurrent login waits and then sees our write.
            cur.execute(
                """
                SELECT last_login_at, streak_count, best_streak
                FROM accounts
                WHERE account_id=%s
                FOR UPDATE
                """,
                (int(account_id),),
            )
            r = fetchone(cur)
            if not r:
                return None

            state = transition(_to_streak(r))
            cur.execute(
                """
                UPDATE accounts
                SET last_login_at=%s, streak_count=%s, best_streak=%s
                WHERE account_id=%s
                """,
                (state.last_login_at, state.streak_count, state.best_streak, int(account_id)),
            )
            return state
