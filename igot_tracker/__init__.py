"""
IGOT Training Tracker
Flask Application Factory.

Usage:
    from igot_tracker import create_app
    app = create_app()           # defaults to "development"
    app = create_app("testing")  # explicit config
"""

import logging
import os

import click
from flask import Flask, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from sqlalchemy import engine as _sa_engine
from sqlalchemy import event as _sa_event
from werkzeug.exceptions import HTTPException

from igot_tracker.config import config
from igot_tracker.core.exceptions import (
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from igot_tracker.middleware.jwt_auth import init_jwt_middleware
from igot_tracker.middleware.logging_config import configure_logging
from igot_tracker.middleware.rate_limiter import init_rate_limits
from igot_tracker.middleware.timing import init_request_timing
from igot_tracker.models import db
from igot_tracker.utils.responses import error_response

logger = logging.getLogger(__name__)


# ── SQLite FK enforcement (global engine event) ─────────────────────────
@_sa_event.listens_for(_sa_engine.Engine, "connect")
def _enable_sqlite_fk(dbapi_conn, connection_record):
    """Enable foreign key enforcement for SQLite connections."""
    if "sqlite" in type(dbapi_conn).__module__:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


migrate = Migrate()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],                     # no global limit, per-route only
)


def cors_origins(raw) -> str | list[str]:
    """Allowed origins from the comma-separated CORS_ORIGINS setting.

    ``"*"`` allows every origin; an empty setting allows none.
    """
    if raw is None or raw.strip() == "*":
        return "*"
    return [o.strip() for o in raw.split(",") if o.strip()]


def _register_error_handlers(app):
    """Translate service exceptions and HTTP errors into the envelope."""

    @app.errorhandler(ValidationError)
    def _validation(error: ValidationError):
        return error_response(str(error), 400)

    @app.errorhandler(AuthError)
    def _auth(error: AuthError):
        return error_response(str(error), 401)

    @app.errorhandler(ForbiddenError)
    def _forbidden(error: ForbiddenError):
        return error_response(str(error), 403)

    @app.errorhandler(NotFoundError)
    def _not_found(error: NotFoundError):
        logger.debug("%s id=%s not found", error.resource, error.resource_id)
        return error_response(str(error), 404)

    @app.errorhandler(ConflictError)
    def _conflict(error: ConflictError):
        return error_response(str(error), 409)

    @app.errorhandler(HTTPException)
    def _http(error: HTTPException):
        if error.code == 404:
            return error_response("Resource not found", 404)
        if error.code == 405:
            return error_response("Method not allowed", 405)
        if error.code == 429:
            return error_response("Too many requests", 429)
        return error_response(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def _server_error(error: Exception):
        db.session.rollback()
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response("Server Error", 500)


def _register_cli(app):
    @app.cli.command("create-admin")
    @click.option("--name", required=True)
    @click.option("--email", required=True)
    @click.option("--password", required=True)
    def create_admin_cmd(name, email, password):
        """Create the first admin account."""
        from igot_tracker.services.user_service import create_admin
        user = create_admin(name=name, email=email, password=password)
        click.echo(f"Admin {user.email} created (id={user.id}).")


def create_app(config_name=None):
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     One of: "development", "testing", "production".
                     Defaults to APP_ENV env var, or "development" if unset.

    Returns:
        Configured Flask application instance.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "development")

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config[config_name]())

    # ── Structured logging (must be first) ───────────────────────────────
    configure_logging(app)

    # ── Extensions ───────────────────────────────────────────────────────
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    CORS(app, origins=cors_origins(app.config.get("CORS_ORIGINS", "*")))

    # ── Request timing + identity ────────────────────────────────────────
    init_request_timing(app)
    init_jwt_middleware(app)

    # ── Request guard (Content-Type) ─────────────────────────────────────
    @app.before_request
    def _guard_request():
        if request.method in ("POST", "PUT", "PATCH") and request.path.startswith("/api/"):
            ct = request.content_type or ""
            if request.data and "json" not in ct:
                return error_response("Content-Type must be application/json", 415)
        return None

    # ── Models + tables ──────────────────────────────────────────────────
    from igot_tracker.models import auth as _auth_models          # noqa: F401
    from igot_tracker.models import employee as _employee_models  # noqa: F401
    from igot_tracker.models import office as _office_models      # noqa: F401

    if config_name == "development":
        os.makedirs(app.instance_path, exist_ok=True)
    with app.app_context():
        try:
            db.create_all()
        except Exception as e:
            app.logger.warning("db.create_all() failed: %s", e)

    # ── Blueprints ───────────────────────────────────────────────────────
    from igot_tracker.blueprints.auth_bp import auth_bp
    from igot_tracker.blueprints.employee_bp import employee_bp
    from igot_tracker.blueprints.health_bp import health_bp
    from igot_tracker.blueprints.office_bp import office_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(office_bp)
    app.register_blueprint(employee_bp)
    app.register_blueprint(health_bp)

    _register_error_handlers(app)
    _register_cli(app)

    # ── Rate limiting (after blueprints registered) ──────────────────────
    init_rate_limits(app, limiter)

    return app
