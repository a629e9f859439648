from __future__ import annotations

from typing import Optional, Protocol

from .model import LockState


class LockRepository(Protocol):
    def get(self, resource_key: str) -> Optional[LockState]:
        raise NotImplementedError

    def set(self, resource_key: str, locked: bool) -> LockState:
        """Insert or overwrite the flag for ``resource_key``."""

        raise NotImplementedError
