from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module, load_settings

from .analytics.controller import register as register_analytics
from .container import Container, build_container
from .core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .records.controller import register as register_records
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _bad_request(e):
        return jsonify({"message": str(e)}), 400

    @app.errorhandler(AuthenticationError)
    def _unauthorized(e):
        return jsonify({"message": str(e)}), 401

    @app.errorhandler(AuthorizationError)
    def _forbidden(e):
        return jsonify({"message": str(e)}), 403

    @app.errorhandler(NotFoundError)
    def _not_found(e):
        return jsonify({"message": str(e)}), 404

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return jsonify({"message": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def _server_error(e):
        logger.exception("Unhandled error while serving request")
        return jsonify({"message": "Internal Server Error"}), 500


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(db_config=db_config)
        logger.info("settings=%s db=%s", settings_module, container.conn.config.describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))

    _register_error_handlers(app)
    register_users(app, container)
    register_records(app, container)
    register_analytics(app, container)

    return app
