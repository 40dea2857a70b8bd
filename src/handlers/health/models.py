"""Pydantic model for the health probe."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(..., description="Always OK while the function can respond")
    timestamp: str = Field(..., description="Current UTC time")
