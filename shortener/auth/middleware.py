"""
Bearer token authentication for the URL API.

Every protected request passes through ``Authenticator.check`` exactly once:

1. ``Authorization: Bearer <token>`` must be present.
2. The token store must know the token. An expired token gets one refresh
   attempt against the SSO service; the replacement is written back onto
   the in-flight request.
3. The (possibly refreshed) token must carry a valid HMAC signature.

Only then does the view run.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Mapping, Optional

from flask import current_app, g, jsonify, request
from prometheus_client import Counter

from ..schemas import ErrorResponse
from ..storage import TokenStatus, TokenStore
from .errors import (
    AuthError,
    MissingTokenError,
    RefreshError,
    StoreUnavailableError,
    TokenExpiredError,
    TokenNotFoundError,
)
from .signature import verify_signature
from .sso import AUTH_HEADER, BEARER, SSORefreshClient

logger = logging.getLogger(__name__)

AUTH_REQUESTS = Counter(
    "shortener_auth_requests_total",
    "Authentication decisions by outcome",
    ["outcome"],
)


def token_fingerprint(token: str) -> str:
    """Short, non-reversible token identifier for logs."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()[:8]


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """Settings consumed by ``Authenticator``."""
    secret_key: str
    sso_url: Optional[str] = None
    sso_timeout: float = 5.0

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "AuthConfig":
        """Build from a Flask config mapping."""
        return cls(
            secret_key=config.get("JWT_SECRET_KEY") or config["SECRET_KEY"],
            sso_url=config.get("SSO_URL") or None,
            sso_timeout=float(config.get("SSO_TIMEOUT", 5.0)),
        )


@dataclass(frozen=True, slots=True)
class AuthResult:
    """Successful authentication of one request."""
    token: str
    claims: dict[str, Any] = field(default_factory=dict)
    refreshed: bool = False


class Authenticator:
    """Validates bearer tokens against the token store and their signature.

    Args:
        config: Secret and SSO settings.
        store: Anything implementing ``TokenStore``.
        refresher: Object with ``refresh(old_token) -> str``. Built from
            ``config.sso_url`` when omitted; without either, expired tokens
            cannot be refreshed.
        verifier: ``(token, secret) -> claims`` signature check.
    """

    def __init__(
        self,
        config: AuthConfig,
        store: TokenStore,
        refresher: Optional[Any] = None,
        verifier: Callable[[str, str], dict[str, Any]] = verify_signature,
    ) -> None:
        if refresher is None and config.sso_url:
            refresher = SSORefreshClient(config.sso_url, timeout=config.sso_timeout)

        self.config = config
        self.store = store
        self.refresher = refresher
        self.verifier = verifier

    @staticmethod
    def extract_token(authorization: Optional[str]) -> str:
        """Pull the raw token out of an ``Authorization`` header value."""
        if not authorization:
            raise MissingTokenError("authorization header absent")

        scheme, _, credentials = authorization.partition(" ")
        if scheme != BEARER:
            raise MissingTokenError("authorization scheme is not bearer")

        token = credentials.strip()
        if not token:
            raise MissingTokenError("bearer token is empty")
        return token

    def check(self, authorization: Optional[str]) -> AuthResult:
        """Authenticate a raw ``Authorization`` header value.

        Raises:
            AuthError: One subclass per rejection reason.
        """
        token = self.extract_token(authorization)
        refreshed = False

        result = self.store.is_token_valid(token)
        if result.status is TokenStatus.NOT_FOUND:
            raise TokenNotFoundError(f"token {token_fingerprint(token)} not found")

        if result.status is TokenStatus.EXPIRED:
            logger.warning(
                f"Token {token_fingerprint(token)} is expired, attempting to refresh"
            )
            token = self._refresh(token)
            refreshed = True
        elif result.status is not TokenStatus.VALID:
            raise StoreUnavailableError(f"token store error: {result.error}")

        # A refreshed token is trusted without another store lookup
        claims = self.verifier(token, self.config.secret_key)
        return AuthResult(token=token, claims=claims, refreshed=refreshed)

    def _refresh(self, token: str) -> str:
        if self.refresher is None:
            raise TokenExpiredError("token expired and no SSO refresh is configured")

        try:
            return self.refresher.refresh(token)
        except RefreshError as e:
            raise TokenExpiredError(f"failed to refresh token: {e}") from e

    def authenticate(self):
        """Authenticate the current Flask request.

        Returns:
            None when the request may proceed, otherwise an error response.
        """
        try:
            result = self.check(request.headers.get(AUTH_HEADER))
        except AuthError as e:
            self._log_rejection(e)
            AUTH_REQUESTS.labels(outcome=e.reason).inc()
            return jsonify(ErrorResponse(error=e.message).model_dump()), e.status_code

        if result.refreshed:
            # Downstream handlers and access logs must see the new token
            request.environ["HTTP_AUTHORIZATION"] = f"{BEARER} {result.token}"
            logger.info(f"Token refreshed, now {token_fingerprint(result.token)}")
            AUTH_REQUESTS.labels(outcome="refreshed").inc()
        else:
            AUTH_REQUESTS.labels(outcome="ok").inc()

        g.auth_token = result.token
        g.token_claims = result.claims
        return None

    @staticmethod
    def _log_rejection(error: AuthError) -> None:
        if isinstance(error, MissingTokenError):
            logger.info(f"No token provided: {error.detail}")
        elif isinstance(error, TokenNotFoundError):
            logger.info(f"Rejected request: {error.detail}")
        else:
            logger.error(f"Rejected request ({error.reason}): {error.detail}")


def get_authenticator() -> Authenticator:
    """Get the authenticator registered on the current app."""
    return current_app.extensions["authenticator"]


def auth_required(func: Callable) -> Callable:
    """
    Decorator to require a valid bearer token.

    Sets g.auth_token and g.token_claims on success.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        rejection = get_authenticator().authenticate()
        if rejection is not None:
            return rejection
        return func(*args, **kwargs)

    return wrapper
