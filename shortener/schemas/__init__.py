"""Pydantic schema models for API validation."""

from .common import ErrorResponse, HealthResponse, MessageResponse
from .urls import DeleteURLRequest, SaveURLRequest, URLResponse

__all__ = [
    # URL schemas
    "SaveURLRequest",
    "DeleteURLRequest",
    "URLResponse",
    # Common schemas
    "ErrorResponse",
    "MessageResponse",
    "HealthResponse",
]
