"""Pydantic models for section creation."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.slug import derive_section_id


class CreateSectionRequest(BaseModel):
    """Validation model for create section request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Display name; the section id is derived from it",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not derive_section_id(value):
            raise ValueError("Section name must contain at least one letter or digit")
        return value
