from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .analytics.controller import register as register_analytics
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema
from .payroll.controller import register as register_payroll
from .settings import get_settings_module

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    storage = getattr(settings, "STORAGE", "memory")
    logger.info("settings=%s storage=%s", settings_module, storage)

    if container is None:
        container = build_container(
            storage=storage,
            db_config=getattr(settings, "DB_CONFIG", None),
            payroll_rates=getattr(settings, "PAYROLL_RATES", None),
        )
    if container.conn is not None and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(container.conn)
        logger.info("database schema ready")

    app.extensions["attendance_payroll"] = container

    register_attendance(app, container)
    register_payroll(app, container)
    register_analytics(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"success": True, "message": "Employee routes are healthy", "storage": storage})

    return app
