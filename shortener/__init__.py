"""URL Shortener Application Factory."""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS
from prometheus_client import make_wsgi_app
from werkzeug.middleware.dispatcher import DispatcherMiddleware

from .auth import AuthConfig, Authenticator
from .config import Config
from .models import get_db, init_db
from .schemas import HealthResponse
from .storage import PyDALStorage, TokenStore


def create_app(
    config_class: type = Config,
    token_store: Optional[TokenStore] = None,
    refresher: Optional[object] = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class.
        token_store: Overrides the PyDAL token store (tests, other backends).
        refresher: Overrides the SSO refresh client built from ``SSO_URL``.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    _init_logging(app)

    # Initialize CORS
    CORS(app, resources={
        r"/api/*": {
            "origins": app.config.get("CORS_ORIGINS", "*"),
            "methods": ["GET", "POST", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
        }
    })

    # Initialize database
    with app.app_context():
        db = init_db(app, config_class)

    storage = PyDALStorage(db)
    app.extensions["storage"] = storage
    app.extensions["authenticator"] = Authenticator(
        AuthConfig.from_mapping(app.config),
        token_store if token_store is not None else storage,
        refresher=refresher,
    )
    if not app.config.get("SSO_URL") and refresher is None:
        app.logger.warning("SSO_URL not set, expired tokens will not be refreshed")

    # Register blueprints
    from .routes import redirect_bp, urls_bp

    app.register_blueprint(urls_bp, url_prefix="/api/v1/url")

    # Register redirect blueprint at root level for short URLs
    app.register_blueprint(redirect_bp, url_prefix="")

    # Health check endpoint
    @app.route("/healthz")
    def health_check():
        """Health check endpoint."""
        try:
            get_db().executesql("SELECT 1")
        except Exception as e:
            app.logger.error(f"Health check failed: {e}")
            return HealthResponse(status="unhealthy", database="disconnected").model_dump(), 503
        return HealthResponse(status="healthy", database="connected").model_dump(), 200

    # Readiness check endpoint
    @app.route("/readyz")
    def readiness_check():
        """Readiness check endpoint."""
        return {"status": "ready"}, 200

    # Add Prometheus metrics endpoint
    if app.config.get("PROMETHEUS_ENABLED"):
        app.wsgi_app = DispatcherMiddleware(
            app.wsgi_app,
            {"/metrics": make_wsgi_app()}
        )

    return app


def _init_logging(app: Flask) -> None:
    """Configure root logging from app config.

    Args:
        app: Flask application instance.
    """
    level = app.config.get("LOG_LEVEL", "INFO")
    logging.basicConfig(level=level, format=app.config.get("LOG_FORMAT"))
    logging.getLogger("shortener").setLevel(level)
    app.logger.setLevel(level)
