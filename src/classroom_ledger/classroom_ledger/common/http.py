from __future__ import annotations

from flask import request, session

from ..core.exceptions import ValidationError


def json_body() -> dict:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def current_role() -> str | None:
    return session.get("role")
