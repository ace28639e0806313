"""
Common response models and utilities.

Error schema and the camelCase base model shared by API responses.

Dependencies: pydantic
System role: Common API response structures
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_timestamp() -> str:
    """Current time as an ISO 8601 UTC string."""
    return datetime.now(timezone.utc).isoformat()


class CamelModel(BaseModel):
    """Response model serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(CamelModel):
    """Error response schema."""

    success: bool = False
    error: str = Field(description="Error message")
    details: dict | None = Field(default=None, description="Additional error context")
    request_id: str | None = Field(default=None, description="Correlation ID of the request")
    timestamp: str = Field(default_factory=utc_timestamp)


class HealthResponse(BaseModel):
    """Body of the health probes."""

    status: str = Field(description="healthy or unhealthy")
    message: str
    version: str
