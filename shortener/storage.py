"""
URL and token storage.

The auth middleware only depends on the ``TokenStore`` capability, so any
backend that answers ``is_token_valid`` with a ``TokenCheck`` can stand in
for the PyDAL implementation below.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Protocol

from pydal import DAL

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base error for storage operations."""


class URLNotFoundError(StorageError):
    """No URL is stored under the requested alias."""


class URLExistsError(StorageError):
    """The alias is already taken."""


class TokenStatus(str, Enum):
    """Outcome of a token lookup."""
    VALID = "valid"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class TokenCheck:
    """Tagged result of ``TokenStore.is_token_valid``."""
    status: TokenStatus
    error: Optional[Exception] = None

    @property
    def valid(self) -> bool:
        return self.status is TokenStatus.VALID


class TokenStore(Protocol):
    """Read-only token validity lookup."""

    def is_token_valid(self, token: str) -> TokenCheck:
        ...


class PyDALStorage:
    """PyDAL-backed URL and token storage.

    Args:
        db: Connection with the shortener tables defined.
        clock: Returns the store's notion of "now" (naive UTC).
    """

    __slots__ = ("_db", "_clock")

    def __init__(self, db: DAL, clock: Callable[[], datetime] = datetime.utcnow) -> None:
        self._db = db
        self._clock = clock

    @property
    def db(self) -> DAL:
        """Get underlying DAL instance."""
        return self._db

    def save_url(self, url_to_save: str, alias: str) -> int:
        """Store a new alias mapping and return its row id."""
        db = self._db
        try:
            url_id = db.short_urls.insert(url=url_to_save, alias=alias)
            db.commit()
        except Exception as e:
            db.rollback()
            try:
                exists = db(db.short_urls.alias == alias).count() > 0
            except Exception as lookup_error:
                logger.error(f"Alias lookup after failed insert errored: {lookup_error}")
                exists = False
            if exists:
                raise URLExistsError(f"alias {alias!r} already exists") from e
            raise StorageError("failed to save url") from e

        return int(url_id)

    def get_url(self, alias: str) -> str:
        """Resolve an alias to its destination URL."""
        db = self._db
        try:
            row = db(db.short_urls.alias == alias).select(db.short_urls.url).first()
        except Exception as e:
            raise StorageError("failed to get url") from e

        if row is None:
            raise URLNotFoundError(f"alias {alias!r} not found")
        return row.url

    def delete_url(self, alias: str) -> None:
        """Delete the mapping for an alias."""
        db = self._db
        try:
            deleted = db(db.short_urls.alias == alias).delete()
            db.commit()
        except Exception as e:
            db.rollback()
            raise StorageError("failed to delete url") from e

        if not deleted:
            raise URLNotFoundError(f"alias {alias!r} not found")

    def save_token(
        self,
        token: str,
        user_id: int,
        app_id: int,
        expires_at: datetime,
    ) -> int:
        """Record an issued token."""
        db = self._db
        try:
            token_id = db.user_tokens.insert(
                token=token,
                user_id=user_id,
                app_id=app_id,
                created_at=self._clock(),
                expires_at=expires_at,
            )
            db.commit()
        except Exception as e:
            db.rollback()
            raise StorageError("failed to save token") from e

        return int(token_id)

    def is_token_valid(self, token: str) -> TokenCheck:
        """Check that a token is known and not past its expiry."""
        db = self._db
        try:
            row = db(db.user_tokens.token == token).select(
                db.user_tokens.expires_at,
            ).first()
        except Exception as e:
            logger.error(f"Token lookup failed: {e}")
            return TokenCheck(TokenStatus.ERROR, e)

        if row is None:
            return TokenCheck(TokenStatus.NOT_FOUND)

        if self._clock() > row.expires_at:
            return TokenCheck(TokenStatus.EXPIRED)

        return TokenCheck(TokenStatus.VALID)

    def close(self) -> None:
        self._db.close()
