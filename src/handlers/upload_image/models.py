"""Pydantic models for image upload request/response."""

from typing import Any

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.models.section import Image
from core.utils.constants import ALLOWED_MIME_TYPES, MAX_FILE_SIZE, get_max_file_size_mb
from core.utils.mime import detect_mime_type

logger = Logger(utc=True)


class UploadImageRequest(BaseModel):
    """Validation model for image upload request.

    Built from either multipart fields (``sectionId``, ``image`` file part)
    or a JSON body with a base64 ``image`` and an optional ``filename``.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    section_id: str = Field(..., alias="sectionId", min_length=1, description="Target section id")
    file_name: str = Field("", alias="filename", max_length=255, description="Original file name")
    file: bytes = Field(..., description="Raw image bytes")

    @field_validator("file")
    @classmethod
    def validate_file(cls, value: bytes) -> bytes:
        """
        Validate file bytes:
        - must not be empty
        - must not exceed MAX_FILE_SIZE
        - must carry an allowed image signature
        """
        if not value:
            raise ValueError("Image file must not be empty")

        if len(value) > MAX_FILE_SIZE:
            logger.error("File size validation error: File size exceeds limit")
            raise ValueError(f"File size exceeds {get_max_file_size_mb()}MB limit")

        try:
            mime_type = detect_mime_type(value)
        except ValueError as exc:
            raise ValueError("Only image files are allowed") from exc

        if mime_type not in ALLOWED_MIME_TYPES:
            raise ValueError("Only image files are allowed")

        return value

    @property
    def mime_type(self) -> str:
        return detect_mime_type(self.file)


class UploadImageResponse(BaseModel):
    """Response model for successful image upload."""

    message: str = Field(..., description="Success message")
    image: Image = Field(..., description="The stored image reference")
    section: dict[str, Any] = Field(..., description="Updated section record")
