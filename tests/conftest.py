"""Pytest configuration and fixtures for URL shortener tests."""

from __future__ import annotations

import os
from datetime import datetime, timedelta

import jwt
import pytest
from pydal import DAL

# Set testing environment
os.environ["FLASK_ENV"] = "testing"

from shortener.auth.errors import RefreshError  # noqa: E402
from shortener.models import define_tables  # noqa: E402
from shortener.storage import PyDALStorage, TokenCheck, TokenStatus  # noqa: E402

SECRET = "test-jwt-secret-0123456789abcdef0123456789abcdef0123456789abcdef"
NOW = datetime(2024, 1, 1, 12, 0, 0)


class FakeTokenStore:
    """Token store double answering from a fixed status map."""

    def __init__(self, statuses: dict[str, TokenStatus] | None = None,
                 error: Exception | None = None):
        self.statuses = statuses or {}
        self.error = error
        self.calls: list[str] = []

    def is_token_valid(self, token: str) -> TokenCheck:
        self.calls.append(token)
        status = self.statuses.get(token, TokenStatus.NOT_FOUND)
        if status is TokenStatus.ERROR:
            return TokenCheck(status, self.error or RuntimeError("connection refused"))
        return TokenCheck(status)


class FakeRefresher:
    """SSO refresh double returning a fixed token or failing."""

    def __init__(self, new_token: str | None = None):
        self.new_token = new_token
        self.calls: list[str] = []

    def refresh(self, old_token: str) -> str:
        self.calls.append(old_token)
        if self.new_token is None:
            raise RefreshError("refresh endpoint returned 401")
        return self.new_token


@pytest.fixture
def make_token():
    """Helper to sign a JWT for tests."""
    def _make_token(secret: str = SECRET, algorithm: str = "HS256", **claims) -> str:
        payload = {"uid": 1, "app_id": 1, **claims}
        return jwt.encode(payload, secret, algorithm=algorithm)
    return _make_token


@pytest.fixture
def db():
    """In-memory database with the shortener tables."""
    db = DAL("sqlite:memory")
    define_tables(db)
    yield db
    db.close()


@pytest.fixture
def storage(db):
    """PyDAL storage with a frozen clock."""
    return PyDALStorage(db, clock=lambda: NOW)


@pytest.fixture
def app():
    """Create test application."""
    from shortener import create_app
    from shortener.config import TestingConfig

    app = create_app(TestingConfig)
    yield app
    app.config["db"].close()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def auth_headers():
    """Helper to create auth headers with a token."""
    def _auth_headers(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def issue_token(app, make_token):
    """Sign a token and record it in the app's token store."""
    def _issue_token(expires_in: timedelta = timedelta(hours=1), **claims) -> str:
        token = make_token(**claims)
        app.extensions["storage"].save_token(
            token, user_id=1, app_id=1, expires_at=datetime.utcnow() + expires_in,
        )
        return token
    return _issue_token
