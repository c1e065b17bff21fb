from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import load_settings

from .container import build_container_from_settings
from .database.bootstrap import apply_schema, list_tables
from .documents.controller import register as register_documents
from .staff.controller import register as register_staff

logger = logging.getLogger(__name__)


def create_app(overrides: Optional[Dict[str, Any]] = None) -> Flask:
    """Build the Flask app from the APP_ENV settings module.

    ``overrides`` replaces individual settings (tests point DATA_DIR and
    DOWNLOADS_DIR at temporary directories this way).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings = load_settings(overrides)

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = settings.SECRET_KEY
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    container = build_container_from_settings(settings)
    logger.info("Using settings=%s db=%s", settings.SETTINGS_MODULE, container.conn.describe())

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(container.conn)
        logger.debug("Schema ready (tables=%d)", len(list_tables(container.conn)))

    app.extensions["staff_directory"] = container

    register_staff(app, container)
    register_documents(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"success": True, "data": {"database": container.conn.describe()}})

    return app
