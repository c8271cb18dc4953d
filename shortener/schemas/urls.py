"""URL mapping Pydantic models."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

ALIAS_REGEX = r"^[a-zA-Z0-9_\-]+$"


class SaveURLRequest(BaseModel):
    """Create short URL request payload."""

    url: str = Field(..., min_length=1, description="Destination URL")
    alias: Optional[str] = Field(
        None,
        max_length=255,
        pattern=ALIAS_REGEX,
        description="Custom alias (generated if omitted)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "url": "https://example.com/some/long/path",
                "alias": "example",
            }
        }
    )

    @field_validator("url", mode="before")
    @classmethod
    def strip_url(cls, v: str) -> str:
        """Strip whitespace from URL."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Only absolute http(s) URLs can be shortened."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("url must be an absolute http(s) URL")
        return v

    @field_validator("alias", mode="before")
    @classmethod
    def empty_alias_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank alias as not provided."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class DeleteURLRequest(BaseModel):
    """Delete short URL request payload."""

    alias: str = Field(..., min_length=1, max_length=255, description="Alias to delete")

    @field_validator("alias", mode="before")
    @classmethod
    def strip_alias(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip()
        return v


class URLResponse(BaseModel):
    """Alias mapping returned by the API."""

    id: Optional[int] = Field(None, description="Row ID")
    alias: str = Field(..., description="Short alias")
    url: str = Field(..., description="Destination URL")
