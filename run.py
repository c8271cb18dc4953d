#!/usr/bin/env python3
"""
URL Shortener Entry Point.

Runs the Flask application using the Hypercorn server.
"""

from __future__ import annotations

import asyncio
import os
import sys
import time

from hypercorn.asyncio import serve
from hypercorn.config import Config as HypercornConfig
from hypercorn.middleware import AsyncioWSGIMiddleware

from shortener import create_app
from shortener.config import ProductionConfig, get_config


def wait_for_database(config_class: type, max_retries: int = 30, retry_delay: int = 2) -> bool:
    """
    Wait for database to be available.

    Args:
        config_class: Configuration class providing the DB URI
        max_retries: Maximum number of connection attempts
        retry_delay: Delay between retries in seconds

    Returns:
        True if database is available, False otherwise
    """
    from pydal import DAL

    db_uri = config_class.get_db_uri()
    print(f"Waiting for database connection: {config_class.DB_HOST}:{config_class.DB_PORT}")

    for attempt in range(1, max_retries + 1):
        try:
            db = DAL(db_uri, pool_size=1, migrate=False)
            db.executesql("SELECT 1")
            db.close()
            print(f"Database connection successful after {attempt} attempt(s)")
            return True
        except Exception as e:
            print(f"Database connection attempt {attempt}/{max_retries} failed: {e}")
            if attempt < max_retries:
                time.sleep(retry_delay)

    return False


async def main(config_class: type) -> None:
    """Main async entry point."""
    app = create_app(config_class)

    # Configure Hypercorn
    hypercorn_config = HypercornConfig()
    hypercorn_config.bind = [f"{config_class.ASGI_HOST}:{config_class.ASGI_PORT}"]
    hypercorn_config.workers = config_class.ASGI_WORKERS

    # Access log configuration
    hypercorn_config.accesslog = "-"  # Log to stdout
    hypercorn_config.errorlog = "-"   # Log errors to stdout

    # Graceful shutdown timeout
    hypercorn_config.graceful_timeout = 10

    print(f"Starting URL shortener with Hypercorn on {config_class.ASGI_HOST}:{config_class.ASGI_PORT}")

    await serve(AsyncioWSGIMiddleware(app), hypercorn_config)


def run_dev(config_class: type) -> None:
    """Run in development mode with auto-reload."""
    app = create_app(config_class)

    print(f"Starting URL shortener in development mode on {config_class.ASGI_HOST}:{config_class.ASGI_PORT}")
    app.run(host=config_class.ASGI_HOST, port=config_class.ASGI_PORT, debug=True)


if __name__ == "__main__":
    config_class = get_config()
    if config_class is ProductionConfig:
        ProductionConfig.validate()

    # Wait for database (sync operation)
    if not wait_for_database(config_class):
        print("ERROR: Could not connect to database after maximum retries")
        sys.exit(1)

    debug = os.getenv("FLASK_DEBUG", "false").lower() == "true"

    if debug:
        run_dev(config_class)
    else:
        asyncio.run(main(config_class))
