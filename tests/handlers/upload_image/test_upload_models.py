"""Unit tests for upload request models."""

import pytest
from handlers.upload_image.models import UploadImageRequest, UploadImageResponse
from pydantic import ValidationError

from core.models.section import Image
from core.utils.constants import MAX_FILE_SIZE

PNG = b"\x89PNG\r\n\x1a\nfake-image-data"


class TestUploadImageRequest:
    def test_valid_request(self) -> None:
        request = UploadImageRequest(sectionId="summer-trip", filename="beach.png", file=PNG)

        assert request.section_id == "summer-trip"
        assert request.file_name == "beach.png"
        assert request.mime_type == "image/png"

    def test_filename_is_optional(self) -> None:
        request = UploadImageRequest(sectionId="summer-trip", file=PNG)

        assert request.file_name == ""

    def test_missing_section_id(self) -> None:
        with pytest.raises(ValidationError):
            UploadImageRequest(file=PNG)

    def test_empty_file(self) -> None:
        with pytest.raises(ValidationError):
            UploadImageRequest(sectionId="summer-trip", file=b"")

    def test_non_image_file(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            UploadImageRequest(sectionId="summer-trip", file=b"plain text")

        assert "Only image files are allowed" in str(exc_info.value)

    def test_file_size_exceeded(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            UploadImageRequest(sectionId="summer-trip", file=PNG + b"x" * MAX_FILE_SIZE)

        assert "File size exceeds 5MB limit" in str(exc_info.value)

    def test_webp_is_accepted(self) -> None:
        request = UploadImageRequest(sectionId="s1", file=b"RIFF\x24\x00\x00\x00WEBPVP8 data")

        assert request.mime_type == "image/webp"


class TestUploadImageResponse:
    def test_dump(self) -> None:
        response = UploadImageResponse(
            message="Image uploaded successfully",
            image=Image(id="a", url="https://cdn.example.com/s1/a.png"),
            section={"sectionId": "s1"},
        )

        assert response.model_dump()["image"] == {"id": "a", "url": "https://cdn.example.com/s1/a.png"}
