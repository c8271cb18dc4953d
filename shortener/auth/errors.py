"""Authentication errors.

Each rejection carries the HTTP status and the fixed message returned to the
caller. Internal details stay in the logs.
"""


class AuthError(Exception):
    """Base class for request authentication failures."""

    status_code = 401
    message = "Unauthorized"
    reason = "unauthorized"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)
        self.detail = detail


class MissingTokenError(AuthError):
    status_code = 401
    message = "Unauthorized: no token provided"
    reason = "missing_token"


class TokenNotFoundError(AuthError):
    status_code = 401
    message = "Unauthorized: token not found"
    reason = "token_not_found"


class TokenExpiredError(AuthError):
    """Token expired and the SSO refresh did not produce a replacement."""

    status_code = 403
    message = "Token expired and could not be refreshed"
    reason = "token_expired"


class StoreUnavailableError(AuthError):
    status_code = 500
    message = "Internal error validating token"
    reason = "store_unavailable"


class SigningMethodError(AuthError):
    status_code = 401
    message = "Unauthorized: token parsing failed"
    reason = "unexpected_signing_method"


class SignatureInvalidError(AuthError):
    status_code = 401
    message = "Unauthorized: token is not valid"
    reason = "signature_invalid"


class RefreshError(Exception):
    """The SSO refresh endpoint did not return a usable token."""
