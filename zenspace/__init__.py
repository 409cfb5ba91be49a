"""ZenSpace application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from datetime import timedelta
from pathlib import Path
from typing import Mapping, Optional

from flask import Flask, current_app, request
from werkzeug.exceptions import HTTPException

from zenspace.config import config_by_name, engine_options_from_uri
from zenspace.core.errors import AppError, Unauthenticated
from zenspace.core.services import (
    AUTH_SERVICE_KEY,
    JOURNAL_SERVICE_KEY,
    SESSION_REPOSITORY_KEY,
    STORAGE_KEY,
    get_auth_service,
)
from zenspace.core.storage import SQLAlchemyStorage, StorageGateway
from zenspace.extensions import db, init_extensions, login_manager


def create_app(
    config_name: Optional[str] = None,
    overrides: Optional[Mapping[str, object]] = None,
    storage: Optional[StorageGateway] = None,
) -> Flask:
    """Create and configure the ZenSpace Flask application.

    ``overrides`` is applied on top of the selected config class. ``storage``
    replaces the default SQLAlchemy gateway, which tests use to inject failures.
    """
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(__name__, instance_path=str(instance_root), instance_relative_config=True)
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)
    overrides = dict(overrides or {})
    app.config.update(overrides)

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config["SQLALCHEMY_DATABASE_URI"]
    if db_uri.startswith("sqlite:///") and db_uri != "sqlite:///:memory:":
        db_path = Path(db_uri.replace("sqlite:///", "", 1))
        if not db_path.is_absolute():
            db_path = project_root / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"
    if "SQLALCHEMY_ENGINE_OPTIONS" not in overrides:
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = engine_options_from_uri(app.config["SQLALCHEMY_DATABASE_URI"])
    if "PERMANENT_SESSION_LIFETIME" not in overrides:
        app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=int(app.config["SESSION_TTL_DAYS"]))

    _configure_logging(app)
    init_extensions(app)
    _attach_services(app, storage)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_auth_handlers(app)

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    from zenspace.scripts import register_commands

    register_commands(app)

    return app


def _configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger("zenspace").setLevel(level)
    app.logger.setLevel(level)


def _attach_services(app: Flask, storage: Optional[StorageGateway]) -> None:
    """Build the service graph once and hang it off ``app.extensions``."""
    from zenspace.core.auth.auth_service import AuthService
    from zenspace.core.auth.session_repository import SessionRepository
    from zenspace.domains.journal.services import JournalService

    storage = storage or SQLAlchemyStorage(db)
    sessions = SessionRepository(db, app.config["PERMANENT_SESSION_LIFETIME"])
    app.extensions[STORAGE_KEY] = storage
    app.extensions[SESSION_REPOSITORY_KEY] = sessions
    app.extensions[AUTH_SERVICE_KEY] = AuthService(storage, sessions)
    app.extensions[JOURNAL_SERVICE_KEY] = JournalService(storage)


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from zenspace.core.auth.controllers import auth_bp  # local import to avoid circulars
    from zenspace.domains.journal.controllers.journal_api import journal_api_bp

    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(journal_api_bp, url_prefix="/api/journal-entries")


def _register_error_handlers(app: Flask) -> None:
    """JSON error responses in one envelope shape."""

    @app.errorhandler(AppError)
    def _app_error(exc: AppError):
        if exc.status_code >= 500:
            app.logger.error("%s on %s %s: %s", exc.code, request.method, request.path, exc.__cause__ or exc)
        return exc.to_dict(), exc.status_code

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        code = (exc.name or "http_error").lower().replace(" ", "_")
        # Keep the exception's headers (e.g. Allow on 405) and swap in the JSON body.
        response = exc.get_response()
        response.data = app.json.dumps({"ok": False, "error": code, "message": exc.description})
        response.content_type = "application/json"
        return response

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        message = str(exc) if app.debug or app.testing else "Internal server error"
        return {"ok": False, "error": "unexpected_error", "message": message}, 500


def _register_auth_handlers(app: Flask) -> None:
    """Resolve the caller from the session cookie on every request."""
    # Identity lives in the session table, not in Flask's signed session.
    login_manager.session_protection = None

    @login_manager.request_loader
    def _load_user_from_cookie(req):
        token = req.cookies.get(current_app.config["SESSION_TOKEN_COOKIE_NAME"])
        if not token:
            return None
        try:
            return get_auth_service().current_user(token)
        except Unauthenticated:
            return None

    @login_manager.unauthorized_handler
    def _unauthorized():
        exc = Unauthenticated()
        return exc.to_dict(), exc.status_code
