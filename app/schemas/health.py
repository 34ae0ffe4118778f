"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready when the database answers."""

    status: str = Field(default="ok", description="Readiness status")
    database: str = Field(default="ok", description="Database connectivity")
    cache: str = Field(
        default="disabled", description="Redis cache state: ok, unavailable or disabled"
    )


class ReadinessErrorResponse(BaseModel):
    """Response for GET /health/ready when the database is unreachable (503)."""

    status: str = Field(default="not_ready", description="Readiness status")
    message: str = Field(..., description="Reason (e.g. database unreachable)")
