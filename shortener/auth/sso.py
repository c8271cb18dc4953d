"""SSO token refresh client.

Exchanges an expired bearer token for a new one with a single call to the
configured SSO service:

    POST {base_url}/refresh
    Authorization: Bearer <old token>

A 200 response carrying ``{"token": "<new token>"}`` is the only success.
"""

import logging
from typing import Optional

import httpx

from .errors import RefreshError

logger = logging.getLogger(__name__)

AUTH_HEADER = "Authorization"
BEARER = "Bearer"


class SSORefreshClient:
    """Client for the SSO ``/refresh`` endpoint.

    Args:
        base_url: SSO service root, without the ``/refresh`` suffix.
        timeout: Seconds before the call is abandoned.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    __slots__ = ("base_url", "timeout", "_transport")

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def refresh_url(self) -> str:
        return f"{self.base_url}/refresh"

    def refresh(self, old_token: str) -> str:
        """Exchange ``old_token`` for a fresh token.

        Raises:
            RefreshError: On any transport failure, timeout, non-200 status,
                malformed body or missing token field.
        """
        headers = {AUTH_HEADER: f"{BEARER} {old_token}"}

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.refresh_url, headers=headers)
        except httpx.HTTPError as e:
            raise RefreshError(f"refresh request failed: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise RefreshError(f"refresh endpoint returned {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise RefreshError("refresh response is not valid JSON") from e

        if not isinstance(body, dict):
            raise RefreshError("refresh response is not a JSON object")

        new_token = body.get("token")
        if not isinstance(new_token, str) or not new_token:
            raise RefreshError("token not found in response")

        logger.debug("SSO refresh succeeded")
        return new_token
