from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.get("/api/students", endpoint="list_students")
    def list_students():
        teacher_id = request.args.get("teacherId")
        day = request.args.get("date")

        if day:
            rows = container.attendance_service.get_students_with_attendance(teacher_id, day)
            return jsonify([r.to_dict() for r in rows])

        students = container.roster_service.list_students(teacher_id)
        return jsonify([{"id": s.student_id, "name": s.name, "points": s.points} for s in students])

    @app.post("/api/students", endpoint="create_student")
    def create_student():
        body = json_body()
        s = container.roster_service.create_student(body.get("teacherId"), body.get("name"))
        return jsonify({"id": s.student_id, "name": s.name, "teacherId": s.teacher_id, "points": s.points}), 201

    @app.delete("/api/students", endpoint="delete_student")
    def delete_student():
        body = json_body()
        container.roster_service.delete_student(body.get("teacherId"), body.get("name"))
        return jsonify({"success": True})
