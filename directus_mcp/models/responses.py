"""Response models for the HTTP endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Server version")
    timestamp: datetime = Field(..., description="Current server time")
    schema_loaded: bool = Field(default=False, description="Whether the schema cache is populated")
    tools: int = Field(default=0, ge=0, description="Number of enabled tools")
