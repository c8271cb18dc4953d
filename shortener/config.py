"""
URL Shortener Configuration.

Configuration for the token-gated API, PyDAL storage, and the SSO refresh
endpoint.
"""

from __future__ import annotations

import os


class Config:
    """Base configuration."""

    # Application
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    DEBUG = os.getenv("FLASK_DEBUG", "false").lower() == "true"
    TESTING = False

    # Bearer token signatures (HMAC family only)
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)

    # SSO refresh endpoint; refresh is disabled when empty
    SSO_URL = os.getenv("SSO_URL", "")
    SSO_TIMEOUT = float(os.getenv("SSO_TIMEOUT", "5"))

    # Short aliases
    ALIAS_LENGTH = int(os.getenv("ALIAS_LENGTH", "7"))

    # Database - PyDAL compatible
    DB_TYPE = os.getenv("DB_TYPE", "postgres")
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = os.getenv("DB_PORT", "5432")
    DB_NAME = os.getenv("DB_NAME", "url_shortener")
    DB_USER = os.getenv("DB_USER", "app_user")
    DB_PASS = os.getenv("DB_PASS", "app_pass")
    DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))

    # CORS
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    # ASGI Server (Hypercorn)
    ASGI_HOST = os.getenv("ASGI_HOST", "0.0.0.0")
    ASGI_PORT = int(os.getenv("ASGI_PORT", "8082"))
    ASGI_WORKERS = int(os.getenv("ASGI_WORKERS", "4"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Monitoring
    PROMETHEUS_ENABLED = os.getenv("PROMETHEUS_ENABLED", "true").lower() == "true"

    @classmethod
    def get_db_uri(cls) -> str:
        """Build PyDAL-compatible database URI."""
        db_type = cls.DB_TYPE

        # Map common aliases to PyDAL format
        type_map = {
            "postgresql": "postgres",
            "mysql": "mysql",
            "sqlite": "sqlite",
            "mariadb": "mysql",  # MariaDB uses MySQL driver
        }
        db_type = type_map.get(db_type, db_type)

        if db_type == "sqlite":
            if cls.DB_NAME == ":memory:":
                return "sqlite:memory"
            return f"sqlite://{cls.DB_NAME}.db"

        return (
            f"{db_type}://{cls.DB_USER}:{cls.DB_PASS}@"
            f"{cls.DB_HOST}:{cls.DB_PORT}/{cls.DB_NAME}"
        )


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    LOG_LEVEL = "INFO"

    SECRET_KEY = os.getenv("SECRET_KEY")  # Required
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)

    @classmethod
    def validate(cls) -> None:
        """Validate production configuration."""
        if (
            not cls.SECRET_KEY
            or cls.SECRET_KEY == "dev-secret-key-change-in-production"
        ):
            raise ValueError("SECRET_KEY must be set in production")
        if not cls.JWT_SECRET_KEY:
            raise ValueError("JWT_SECRET_KEY must be set in production")


class TestingConfig(Config):
    """Testing configuration."""

    TESTING = True
    DEBUG = True
    DB_TYPE = "sqlite"
    DB_NAME = ":memory:"
    DB_POOL_SIZE = 0

    JWT_SECRET_KEY = "test-jwt-secret-0123456789abcdef0123456789abcdef0123456789abcdef"
    SSO_URL = ""

    # Disable Prometheus in tests to avoid duplicate metric registration
    PROMETHEUS_ENABLED = False

    # CORS - use specific origin in testing
    CORS_ORIGINS = "http://localhost:3000"


def get_config() -> type[Config]:
    """Get configuration based on environment."""
    env = os.getenv("FLASK_ENV", "development").lower()
    config_map = {
        "development": DevelopmentConfig,
        "production": ProductionConfig,
        "testing": TestingConfig,
    }
    return config_map.get(env, DevelopmentConfig)
