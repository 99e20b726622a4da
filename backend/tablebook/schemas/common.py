"""
TableBook Backend — Shared Response Schemas
=============================================

What:  Error and health-check response models shared across routes.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """
    Error response body used by every endpoint.

    Example:
        {"message": "Reservation not found"}
    """
    message: str = Field(description="Human-readable description")


class FieldError(BaseModel):
    """One malformed field in a request body or path."""
    field: str
    message: str


class InvalidRequestResponse(MessageResponse):
    """Returned with HTTP 400 when a request cannot be parsed into its schema."""
    details: List[FieldError] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
    database_version: Optional[str] = Field(
        default=None,
        description="Version string captured by the startup diagnostic",
    )
