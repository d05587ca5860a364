import os
import time
from flask import Flask, g, request
from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import MethodNotAllowed, NotFound as RouteNotFound

load_dotenv()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(config_name=None, **services):
    """Application factory.

    Keyword arguments replace individual collaborators (``repository``,
    ``blob_store``, ``hasher``, ``notifier``, ``verification_store``).
    """
    flask_app = Flask(__name__)

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV")
        if not config_name:
            # Default to production on managed platforms to avoid accidental
            # debug mode/weak defaults when env selection is omitted.
            if os.environ.get("RAILWAY_ENVIRONMENT") or os.environ.get("PORT"):
                config_name = "production"
            else:
                config_name = "development"

    from webapp.config import config_map

    config_cls = config_map.get(config_name, config_map["development"])
    flask_app.config.from_object(config_cls)

    if hasattr(config_cls, "init_app"):
        config_cls.init_app(flask_app)

    # Initialize extensions
    from webapp.extensions import db, migrate, init_services

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)

    # Import models so Alembic sees them
    from webapp.models import Account, Product, Image, HealthCheck  # noqa: F401

    init_services(flask_app, **services)

    # Register blueprints
    from webapp.blueprints.api import api_bp

    flask_app.register_blueprint(api_bp, url_prefix="/v1")

    # Register CLI commands
    from webapp.cli import register_cli

    register_cli(flask_app)

    _register_request_hooks(flask_app)
    _register_error_handlers(flask_app)

    # Health check
    @flask_app.route(
        "/healthz", methods=ALL_METHODS, provide_automatic_options=False
    )
    def health():
        from webapp.errors import MethodNotSupported, StoreUnavailable
        from webapp.services import validation
        from webapp.blueprints.api.inbound import inbound

        if request.method != "GET":
            raise MethodNotSupported(request.method)
        validation.check_read(inbound())

        try:
            db.session.add(HealthCheck())
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            flask_app.logger.exception("Health check insert failed")
            raise StoreUnavailable("health check insert failed") from e

        flask_app.logger.info("Health check successful")
        return "", 200

    return flask_app


def _register_request_hooks(flask_app):
    @flask_app.before_request
    def log_incoming():
        g.request_started = time.perf_counter()
        flask_app.logger.info(
            "Incoming request | Method: %s | Path: %s | IP: %s | UA: %s",
            request.method,
            request.path,
            request.remote_addr,
            request.user_agent.string,
        )

    @flask_app.after_request
    def finish(response):
        response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["X-Content-Type-Options"] = "nosniff"

        started = g.get("request_started")
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        message = "Request finished in %.2fms | Status: %d | Method: %s | Path: %s"
        args = (elapsed_ms, response.status_code, request.method, request.path)
        if response.status_code >= 500:
            flask_app.logger.error(message, *args)
        elif response.status_code >= 400:
            flask_app.logger.warning(message, *args)
        else:
            flask_app.logger.info(message, *args)
        return response


def _register_error_handlers(flask_app):
    from webapp.errors import ApiError
    from webapp.responses import error_response

    @flask_app.errorhandler(ApiError)
    def handle_api_error(err):
        flask_app.logger.info("%s: %s", type(err).__name__, err)
        return error_response(err)

    @flask_app.errorhandler(RouteNotFound)
    def handle_unknown_route(err):
        return "", 404

    @flask_app.errorhandler(MethodNotAllowed)
    def handle_unknown_method(err):
        return "", 405
