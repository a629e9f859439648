from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LockState:
    resource_key: str
    locked: bool
