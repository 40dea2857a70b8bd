"""Pydantic models for delete image request/response."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DeleteImageRequest(BaseModel):
    """Validation model for delete image request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    section_id: str = Field(..., min_length=1, description="Section holding the image")
    image_id: str = Field(..., min_length=1, description="Image ID to delete")


class DeleteImageResponse(BaseModel):
    """Response model for successful image deletion."""

    message: str = Field(..., description="Success message")
    section: dict[str, Any] = Field(..., description="Updated section record")
