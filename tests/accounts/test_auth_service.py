from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime, timedelta

import pytest
from werkzeug.security import generate_password_hash

from src.classroom_ledger.classroom_ledger.accounts.model import Account, StreakState
from src.classroom_ledger.classroom_ledger.accounts.service import AuthService
from src.classroom_ledger.classroom_ledger.core.enums import Role
from src.classroom_ledger.classroom_ledger.core.exceptions import AuthenticationError, StorageError

T0 = datetime(2026, 2, 1, 8, 0, 0)


class InMemoryAccounts:
    def __init__(self, *accounts: Account, fail_updates: bool = False):
        self._by_id = {a.account_id: a for a in accounts}
        self._row_lock = threading.Lock()
        self.fail_updates = fail_updates
        self.update_calls = 0

    def get_by_id(self, account_id: int):
        return self._by_id.get(account_id)

    def get_by_username(self, username: str):
        return next((a for a in self._by_id.values() if a.username == username), None)

    def update_streak(self, account_id: int, transition):
        with self._row_lock:
            self.update_calls += 1
            account = self._by_id.get(account_id)
            if account is None:
                return None
            state = transition(account.streak)
            if self.fail_updates:
                raise StorageError("lock wait timeout exceeded")
            self._by_id[account_id] = replace(account, streak=state)
            return state


def _teacher(**streak) -> Account:
    return Account(
        account_id=1,
        username="msfrizzle",
        password_hash=generate_password_hash("bus123"),
        role=Role.TEACHER,
        streak=StreakState(**streak),
    )


def test_first_login_starts_streak():
    repo = InMemoryAccounts(_teacher())

    result = AuthService(repo).authenticate("msfrizzle", "bus123", now=T0)

    assert (result.streak_count, result.best_streak, result.level) == (1, 1, 1)
    assert result.last_login_at == T0
    assert result.role == Role.TEACHER
    assert repo.get_by_id(1).streak.last_login_at == T0


def test_next_day_login_increments_and_levels_up():
    repo = InMemoryAccounts(_teacher(last_login_at=T0, streak_count=6, best_streak=6))

    result = AuthService(repo).login(1, now=T0 + timedelta(hours=25))

    assert (result.streak_count, result.best_streak, result.level) == (7, 7, 2)
    assert result.to_dict()["lastLoginAt"] == "2026-02-02T09:00:00"


@pytest.mark.parametrize("username, password", [("msfrizzle", "wrong"), ("nobody", "bus123"), ("", ""), (None, None)])
def test_bad_credentials_leave_streak_untouched(username, password):
    repo = InMemoryAccounts(_teacher(last_login_at=T0, streak_count=3, best_streak=4))

    with pytest.raises(AuthenticationError):
        AuthService(repo).authenticate(username, password, now=T0 + timedelta(hours=30))

    assert repo.update_calls == 0
    assert repo.get_by_id(1).streak == StreakState(last_login_at=T0, streak_count=3, best_streak=4)


def test_corrupt_password_hash_is_a_failed_login():
    account = replace(_teacher(), password_hash="CHANGE_ME")
    repo = InMemoryAccounts(account)

    with pytest.raises(AuthenticationError):
        AuthService(repo).authenticate("msfrizzle", "CHANGE_ME")


def test_storage_failure_fails_the_login():
    repo = InMemoryAccounts(_teacher(last_login_at=T0, streak_count=3, best_streak=3), fail_updates=True)

    with pytest.raises(StorageError):
        AuthService(repo).authenticate("msfrizzle", "bus123", now=T0 + timedelta(hours=30))

    assert repo.get_by_id(1).streak.streak_count == 3


def test_unknown_account_id():
    with pytest.raises(AuthenticationError):
        AuthService(InMemoryAccounts()).login(99)


def test_concurrent_logins_count_the_day_once():
    repo = InMemoryAccounts(_teacher(last_login_at=T0, streak_count=3, best_streak=3))
    svc = AuthService(repo)
    now = T0 + timedelta(hours=30)

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda _: svc.login(1, now=now), range(8)))

    assert repo.get_by_id(1).streak.streak_count == 4
    assert {r.streak_count for r in results} == {4}
