"""
Pressroom Backend — Shared Schemas
====================================

Error and health payloads used across all routers.
"""

from typing import Optional

from pydantic import BaseModel, Field

# Upper bound of the INTEGER primary keys (PostgreSQL int4)
MAX_ID = 2_147_483_647


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "article with ID '42' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    storage: str = Field(description="Blob storage: writable, unwritable")
    uptime_seconds: float = Field(description="Seconds since service started")
