"""Health check response models."""

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health status response for GET /health."""

    status: Literal["healthy"]
    """Overall service status."""

    service: str
    """service.name the process reports telemetry under."""

    environment: str
    """Deployment environment name."""

    version: str
    """Service version."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    """When this health check was performed."""
