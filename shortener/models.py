"""PyDAL Database Models."""

from datetime import datetime

from flask import Flask, g
from pydal import DAL, Field

from .config import Config


def define_tables(db: DAL) -> DAL:
    """Define URL shortener tables on an existing connection."""
    # Short URLs - alias to destination, validated by SaveURLRequest
    db.define_table(
        "short_urls",
        Field("alias", "string", length=255, unique=True, notnull=True),
        Field("url", "text", notnull=True),
    )

    # User tokens - issued by the auth service, read-only here
    db.define_table(
        "user_tokens",
        Field("token", "string", length=255, unique=True, notnull=True),
        Field("user_id", "bigint", notnull=True),
        Field("app_id", "integer", notnull=True),
        Field("created_at", "datetime", default=datetime.utcnow),
        Field("expires_at", "datetime", notnull=True),
    )

    # Commit table definitions
    db.commit()
    return db


def init_db(app: Flask, config_class: type = Config) -> DAL:
    """Initialize database connection and define tables."""
    db = DAL(
        config_class.get_db_uri(),
        pool_size=config_class.DB_POOL_SIZE,
        migrate=True,
        lazy_tables=False,
    )
    define_tables(db)

    # Store db instance in app
    app.config["db"] = db

    return db


def get_db() -> DAL:
    """Get database connection for current request context."""
    from flask import current_app

    if "db" not in g:
        g.db = current_app.config.get("db")
    return g.db
