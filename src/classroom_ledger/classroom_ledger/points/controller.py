from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.get("/api/students/points", endpoint="student_points")
    def student_points():
        rows = container.points_service.get_points(request.args.get("teacherId"))
        return jsonify([r.to_dict() for r in rows])

    @app.post("/api/students/points/bulk", endpoint="bulk_update_points")
    def bulk_update_points():
        body = json_body()
        result = container.points_service.apply_points_batch(body.get("teacherId"), body.get("updates"))
        return jsonify(result)
