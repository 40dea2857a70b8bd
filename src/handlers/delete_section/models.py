"""Pydantic models for delete section request/response."""

from pydantic import BaseModel, ConfigDict, Field


class DeleteSectionRequest(BaseModel):
    """Validation model for delete section request."""

    model_config = ConfigDict(str_strip_whitespace=True)
    section_id: str = Field(
        ...,
        min_length=1,
        description="Section ID to delete",
    )


class DeleteSectionResponse(BaseModel):
    """Response model for successful section deletion."""

    message: str = Field(..., description="Success message")
