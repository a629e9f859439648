from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_role, json_body
from ..container import Container
from ..core.constants import ATTENDANCE_LOCK_KEY
from .service import exam_lock_key


def register(app: Flask, container: Container) -> None:
    gate = container.lock_gate

    @app.get("/api/lock-status", endpoint="attendance_lock_status")
    def attendance_lock_status():
        return jsonify({"locked": gate.get_lock(ATTENDANCE_LOCK_KEY)})

    @app.put("/api/lock-status", endpoint="set_attendance_lock")
    def set_attendance_lock():
        locked = json_body().get("locked")
        return jsonify({"locked": gate.set_lock(ATTENDANCE_LOCK_KEY, locked, current_role())})

    @app.get("/api/exams/<slug>/lock", endpoint="exam_lock_status")
    def exam_lock_status(slug: str):
        return jsonify({"locked": gate.get_lock(exam_lock_key(slug))})

    @app.put("/api/exams/<slug>/lock", endpoint="set_exam_lock")
    def set_exam_lock(slug: str):
        locked = json_body().get("locked")
        return jsonify({"locked": gate.set_lock(exam_lock_key(slug), locked, current_role())})
