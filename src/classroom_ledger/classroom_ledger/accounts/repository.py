from __future__ import annotations

from typing import Callable, Optional, Protocol

from .model import Account, StreakState


class AccountRepository(Protocol):
    def get_by_id(self, account_id: int) -> Optional[Account]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[Account]:
        raise NotImplementedError

    def update_streak(
        self,
        account_id: int,
        transition: Callable[[StreakState], StreakState],
    ) -> Optional[StreakState]:
        """Read the streak row, apply ``transition`` and write the result.

        Read and write must happen in one transaction holding the row, so two
        concurrent logins of the same account are serialized. Returns the new
        state, or None if the account does not exist.
        """

        raise NotImplementedError
