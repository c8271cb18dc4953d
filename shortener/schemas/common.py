"""Common Pydantic models used across the application."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Error message")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Unauthorized: no token provided",
            }
        }
    )


class MessageResponse(BaseModel):
    """Standard success message response."""

    message: str = Field(..., description="Success message")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    database: Optional[str] = Field(None, description="Database connection status")
