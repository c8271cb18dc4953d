"""Authentication module for URL shortener.

Includes:
- Bearer token middleware (token store check, SSO refresh, signature check)
- SSO refresh client
- HMAC signature verification
"""

from .errors import (
    AuthError,
    MissingTokenError,
    RefreshError,
    SignatureInvalidError,
    SigningMethodError,
    StoreUnavailableError,
    TokenExpiredError,
    TokenNotFoundError,
)
from .middleware import (
    AuthConfig,
    AuthResult,
    Authenticator,
    auth_required,
    get_authenticator,
)
from .signature import verify_signature
from .sso import SSORefreshClient

__all__ = [
    "AuthConfig",
    "AuthResult",
    "Authenticator",
    "auth_required",
    "get_authenticator",
    "verify_signature",
    "SSORefreshClient",
    "AuthError",
    "MissingTokenError",
    "TokenNotFoundError",
    "TokenExpiredError",
    "StoreUnavailableError",
    "SignatureInvalidError",
    "SigningMethodError",
    "RefreshError",
]
