from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.post("/api/attendance", endpoint="record_attendance")
    def record_attendance():
        body = json_body()
        container.attendance_service.record_attendance(
            body.get("teacherId"),
            body.get("studentName"),
            body.get("status"),
            body.get("date") or None,
        )
        return jsonify({"success": True})

    @app.get("/api/attendance", endpoint="attendance_for_teacher")
    def attendance_for_teacher():
        records = container.attendance_service.get_attendance_for_teacher(request.args.get("teacherId"))
        return jsonify(records)
