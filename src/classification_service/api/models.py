"""
API-specific response models for FastAPI endpoints.

The classify endpoint itself answers with a bare list of Classification;
these models cover the operational endpoints and error bodies.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Overall health status",
        examples=["healthy", "starting", "unhealthy"]
    )
    version: str = Field(
        description="Service version",
        examples=["0.1.0"]
    )
    services: dict[str, str] = Field(
        description="Component-specific status",
        examples=[{"model": "ready"}]
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Health check timestamp (UTC)"
    )


class VersionResponse(BaseModel):
    """Response for version info endpoint."""

    # model_name is a field here, not a pydantic method
    model_config = ConfigDict(protected_namespaces=())

    service_version: str = Field(
        description="Application version"
    )
    model_name: str = Field(
        description="Hugging Face model ID (e.g., 'facebook/bart-large-mnli')"
    )
    max_chunk_tokens: int = Field(
        description="Token budget per chunk",
        ge=1
    )
    confidence_threshold: float = Field(
        description="Scores must be strictly above this to be returned"
    )


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(
        description="Error code",
        examples=["classification_failed", "invalid_request", "internal_error"]
    )
    message: str = Field(
        description="Human-readable message"
    )
    details: Any = Field(
        default=None,
        description="Extra information, only for client errors"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow
    )
