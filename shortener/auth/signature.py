"""Bearer token signature verification."""

from __future__ import annotations

from typing import Any

import jwt

from .errors import SignatureInvalidError, SigningMethodError

# Symmetric HMAC family; anything else is rejected before a key is used
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


def verify_signature(token: str, secret: str) -> dict[str, Any]:
    """Verify an HMAC-signed JWT and return its claims.

    Args:
        token: Raw bearer token.
        secret: Shared signing secret.

    Raises:
        SigningMethodError: Token declares a non-HMAC algorithm.
        SignatureInvalidError: Token is malformed, expired, or the signature
            does not match ``secret``.
    """
    try:
        header = jwt.get_unverified_header(token)
    except jwt.InvalidTokenError as e:
        raise SignatureInvalidError(f"token header could not be parsed: {e}") from e

    algorithm = header.get("alg")
    if algorithm not in HMAC_ALGORITHMS:
        raise SigningMethodError(f"unexpected signing method: {algorithm!r}")

    try:
        # Tokens may carry an audience for other services; exp and nbf still apply
        claims = jwt.decode(
            token, secret, algorithms=[algorithm], options={"verify_aud": False},
        )
    except jwt.InvalidTokenError as e:
        raise SignatureInvalidError(f"token verification failed: {e}") from e

    if not isinstance(claims, dict):
        raise SignatureInvalidError("token is not valid")

    return claims
