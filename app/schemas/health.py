"""Pydantic schemas for health check responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["OK"] = Field(default="OK", description="Service status")
    timestamp: datetime = Field(description="Server time (UTC)")
    uptime: float = Field(description="Seconds since the process started")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Database connectivity status when check is performed",
    )
