from __future__ import annotations

import logging
from typing import Any

from ..common.validators import require_max_length, require_non_empty
from ..core.constants import ATTENDANCE_LOCK_KEY, EXAM_LOCK_PREFIX, MAX_LOCK_KEY_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, LockedError, ValidationError
from .repository import LockRepository

logger = logging.getLogger(__name__)


def exam_lock_key(slug: str) -> str:
    return EXAM_LOCK_PREFIX + require_non_empty(slug, "Exam slug")


class LockGate:
    """Boolean flags consulted before gated mutations.

    Reads are unrestricted. The global attendance lock may only be flipped by
    an admin; any other resource lock (per exam) by a teacher or an admin.
    """

    def __init__(self, locks: LockRepository):
        self._locks = locks

    @staticmethod
    def _clean_key(resource_key: Any) -> str:
        key = require_non_empty(resource_key, "Resource key")
        return require_max_length(key, "Resource key", MAX_LOCK_KEY_LENGTH)

    @staticmethod
    def allowed_roles(resource_key: str) -> frozenset[Role]:
        if resource_key == ATTENDANCE_LOCK_KEY:
            return frozenset({Role.ADMIN})
        return frozenset({Role.ADMIN, Role.TEACHER})

    def get_lock(self, resource_key) -> bool:
        state = self._locks.get(self._clean_key(resource_key))
        return bool(state.locked) if state else False

    def set_lock(self, resource_key, locked, caller_role) -> bool:
        key = self._clean_key(resource_key)

        try:
            role = Role(caller_role) if caller_role is not None else None
        except ValueError:
            role = None
        if role not in self.allowed_roles(key):
            logger.warning("Lock change on %r refused for role %r", key, caller_role)
            raise AuthorizationError("You are not allowed to change this lock")

        if not isinstance(locked, bool):
            raise ValidationError("locked must be a boolean")

        state = self._locks.set(key, locked)
        logger.info("Lock %r set to %s by %s", key, state.locked, role.value)
        return state.locked

    def ensure_unlocked(self, resource_key) -> None:
        if self.get_lock(resource_key):
            raise LockedError(f"{resource_key} is locked")
