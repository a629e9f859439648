from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.post("/api/auth/login", endpoint="login")
    def login():
        body = json_body()
        result = container.auth_service.authenticate(body.get("username"), body.get("password"))

        session.clear()
        session["account_id"] = result.account_id
        session["username"] = result.username
        session["role"] = result.role.value
        return jsonify({"user": result.to_dict()})

    @app.post("/api/auth/logout", endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})
