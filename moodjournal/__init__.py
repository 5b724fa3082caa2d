"""MoodJournal application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from flask import Flask, jsonify

from moodjournal.config import config_by_name
from moodjournal.extensions import init_extensions, login_manager


def create_app(
    config_name: Optional[str] = None,
    config_overrides: Optional[Mapping[str, Any]] = None,
) -> Flask:
    """Create and configure the MoodJournal Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(
        __name__,
        instance_path=str(instance_root),
        instance_relative_config=True,
    )
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)
    if config_overrides:
        app.config.update(config_overrides)

    _configure_logging(app)
    # Projections have a fixed field order.
    app.json.sort_keys = False

    # Ensure the upload folder exists and is absolute
    uploads_path = Path(app.config.get("UPLOAD_FOLDER", "instance/uploads"))
    if not uploads_path.is_absolute():
        uploads_path = project_root / uploads_path
    uploads_path.mkdir(parents=True, exist_ok=True)
    app.config["UPLOAD_FOLDER"] = str(uploads_path)

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    if db_uri.startswith("sqlite:///"):
        db_path = Path(db_uri.replace("sqlite:///", "", 1))
        if not db_path.is_absolute():
            db_path = project_root / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"

    init_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_auth_handlers(app)

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    from moodjournal.scripts.seed_moods import register_commands

    register_commands(app)

    return app


def _configure_logging(app: Flask) -> None:
    level = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)
    logging.getLogger("moodjournal").setLevel(level)


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from moodjournal.core.auth.controllers import auth_bp  # local import to avoid circulars
    from moodjournal.core.users.controllers import user_api_bp
    from moodjournal.domains.journal.controllers.journal_api import journal_api_bp, storage_bp

    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(user_api_bp, url_prefix="/api")
    app.register_blueprint(journal_api_bp, url_prefix="/api")
    app.register_blueprint(storage_bp, url_prefix="/storage")


def _register_error_handlers(app: Flask) -> None:
    """JSON error responses; internal details stay in the logs."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"status": exc.code, "message": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        return {"status": 500, "message": "Something went wrong", "error": "internal_error"}, 500


def _register_auth_handlers(app: Flask) -> None:
    """Stateless bearer-token authentication through Flask-Login."""
    from moodjournal.core.auth.bearer import load_user_from_request

    login_manager.request_loader(load_user_from_request)

    @login_manager.unauthorized_handler
    def _unauthorized():
        return jsonify({"message": "Unauthenticated."}), 401
