from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .accounts.controller import register as register_accounts
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    LockedError,
    StorageError,
    ValidationError,
)
from .database.bootstrap import apply_schema, ensure_admin_account, list_tables
from .locks.controller import register as register_locks
from .points.controller import register as register_points
from .students.controller import register as register_students

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (LockedError, 423),
)


def _register_error_handlers(app: Flask) -> None:
    def handle_domain_error(exc: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                return jsonify({"error": str(exc)}), status
        logger.error("Unhandled domain error: %s", exc)
        return jsonify({"error": "Server error"}), 500

    def handle_storage_error(exc: StorageError):
        logger.error("Storage failure on request", exc_info=exc)
        return jsonify({"error": "Server error"}), 500

    app.register_error_handler(StorageError, handle_storage_error)
    app.register_error_handler(DomainError, handle_domain_error)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_admin_account(
                db_config,
                username=getattr(settings, "ADMIN_USERNAME"),
                password=getattr(settings, "ADMIN_PASSWORD"),
            )

        container = build_container(db_config=db_config)

    app.extensions["classroom_ledger"] = container
    _register_error_handlers(app)

    @app.get("/healthz")
    def healthz():
        return "ok"

    register_accounts(app, container)
    register_attendance(app, container)
    register_students(app, container)
    register_points(app, container)
    register_locks(app, container)

    return app
