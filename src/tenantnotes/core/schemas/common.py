"""
Shared response schemas - errors, messages, health
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    error: str = Field(description="Human-readable error message")

    model_config = ConfigDict(
        json_schema_extra={"example": {"error": "Authentication required"}}
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str = Field(description="Success message")


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = Field(description="Application version")
    checks: dict[str, dict[str, Any]] = Field(description="Individual component health checks")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "timestamp": "2025-09-13T10:30:00Z",
                "version": "1.0.0",
                "checks": {
                    "database": {
                        "connected": True,
                        "status": "healthy",
                        "response_time_ms": 15,
                    }
                },
            }
        }
    )
