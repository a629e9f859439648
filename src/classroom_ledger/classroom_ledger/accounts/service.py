from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from werkzeug.security import check_password_hash

from ..common.datetime_utils import now_utc
from ..common.validators import require_positive_int
from ..core.exceptions import AuthenticationError
from .model import Account, LoginResult
from .repository import AccountRepository
from .streak import level_for, next_streak

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate an account and advance its login streak.

    The streak is applied exactly once per successful login. If persisting it
    fails the error propagates and the login counts as failed.
    """

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def authenticate(self, username: str, password: str, *, now: Optional[datetime] = None) -> LoginResult:
        if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
            raise AuthenticationError("Invalid username or password")

        account = self._accounts.get_by_username(username)
        if not account:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(account.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        return self._apply_login(account, now)

    def login(self, account_id, *, now: Optional[datetime] = None) -> LoginResult:
        account_id = require_positive_int(account_id, "accountId")
        account = self._accounts.get_by_id(account_id)
        if not account:
            raise AuthenticationError("Unknown account")
        return self._apply_login(account, now)

    def _apply_login(self, account: Account, now: Optional[datetime]) -> LoginResult:
        at = now or now_utc()
        state = self._accounts.update_streak(account.account_id, lambda prev: next_streak(prev, at))
        if state is None:
            # Deleted between lookup and update.
            raise AuthenticationError("Unknown account")

        logger.info(
            "Login %s: streak=%d best=%d",
            account.username,
            state.streak_count,
            state.best_streak,
        )
        return LoginResult(
            account_id=account.account_id,
            username=account.username,
            role=account.role,
            streak_count=state.streak_count,
            best_streak=state.best_streak,
            level=level_for(state.streak_count),
            last_login_at=state.last_login_at,
        )
