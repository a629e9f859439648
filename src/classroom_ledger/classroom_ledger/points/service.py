from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, List

from ..common.validators import require_non_empty, require_positive_int
from ..core.exceptions import ValidationError
from .model import PointsUpdate, StudentPoints
from .repository import PointsRepository

logger = logging.getLogger(__name__)

# Upper bound of the points column (signed INT, CHECK points >= 0).
MAX_POINTS = 2_147_483_647


def _as_number(value: Any) -> float | int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, (numbers.Real, Decimal)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return float(text)
        except ValueError:
            return 0
    return 0


def clamp_points(value: Any) -> int:
    """Coerce a requested balance to a non-negative integer.

    Numbers round half up, negatives become 0, and anything non-numeric
    (None, garbage strings, NaN, infinities) becomes 0.
    """

    number = _as_number(value)
    if isinstance(number, float):
        if not math.isfinite(number):
            return 0
        number = math.floor(number + 0.5)
    return min(max(0, int(number)), MAX_POINTS)


def _parse_entry(entry: Any, index: int) -> PointsUpdate:
    if isinstance(entry, PointsUpdate):
        name, points = entry.name, entry.points
    elif isinstance(entry, Mapping):
        name, points = entry.get("name"), entry.get("points")
    elif isinstance(entry, Sequence) and not isinstance(entry, (str, bytes)) and len(entry) == 2:
        name, points = entry
    else:
        raise ValidationError(f"updates[{index}] must be an object with name and points")
    return PointsUpdate(name=require_non_empty(name, f"updates[{index}].name"), points=clamp_points(points))


class PointsService:
    """Use cases: read and bulk-write the points balances of a class."""

    def __init__(self, points: PointsRepository):
        self._points = points

    def get_points(self, teacher_id) -> List[StudentPoints]:
        return list(self._points.list_for_teacher(require_positive_int(teacher_id, "teacherId")))

    def apply_points_batch(self, teacher_id, updates) -> dict:
        teacher_id = require_positive_int(teacher_id, "teacherId")
        if isinstance(updates, (str, bytes, Mapping)) or not isinstance(updates, Sequence):
            raise ValidationError("updates must be a list")

        # Everything is validated before the transaction opens.
        batch = [_parse_entry(entry, i) for i, entry in enumerate(updates)]
        if not batch:
            return {"ok": True}

        changed = self._points.apply_batch(teacher_id, batch)
        logger.info("Points batch for teacher %s: %d entries, %d rows changed", teacher_id, len(batch), changed)
        return {"ok": True}
