"""Unit tests for request validation utilities."""

from typing import Any

import pytest
from pydantic import BaseModel, ValidationError

from core.utils.validators import (
    sanitize_validation_errors,
    validate_request,
)


class SampleModel(BaseModel):
    """Sample model for validation tests."""

    name: str
    age: int


class RequiredOnlyModel(BaseModel):
    """Model with a required field only."""

    name: str


class TestSanitizeValidationErrors:
    """Tests for sanitize_validation_errors."""

    def test_sanitizes_required_field(self) -> None:
        errors = [
            {
                "loc": ("name",),
                "msg": "Field required",
            }
        ]

        result = sanitize_validation_errors(errors)

        assert result == [
            {
                "field": "name",
                "message": "This field is required",
            }
        ]

    def test_defaults_field_to_body(self) -> None:
        errors = [{"msg": "Invalid value"}]

        result = sanitize_validation_errors(errors)

        assert result == [
            {
                "field": "body",
                "message": "Invalid value",
            }
        ]

    def test_removes_value_error_prefix(self) -> None:
        errors = [
            {
                "loc": ("age",),
                "msg": "Value error, must be positive",
            }
        ]

        result = sanitize_validation_errors(errors)

        assert result == [
            {
                "field": "age",
                "message": "must be positive",
            }
        ]

    def test_preserves_pydantic_type_message(self) -> None:
        """Pydantic v2 type errors are not rewritten."""
        errors = [
            {
                "loc": ("age",),
                "msg": "Input should be a valid integer",
            }
        ]

        result = sanitize_validation_errors(errors)

        assert result == [
            {
                "field": "age",
                "message": "Input should be a valid integer",
            }
        ]

    def test_sanitizes_base64_message(self) -> None:
        errors = [{"loc": ("file",), "msg": "Invalid base64-encoded string"}]

        result = sanitize_validation_errors(errors)

        assert result[0]["message"] == "File must be a valid Base64-encoded string"

    def test_joins_nested_location(self) -> None:
        errors = [{"loc": ("images", 0, "id"), "msg": "Input should be a valid string"}]

        result = sanitize_validation_errors(errors)

        assert result == [{"field": "images.0.id", "message": "Invalid value type"}]


class TestValidateRequest:
    """Tests for validate_request."""

    def test_validate_request_success(self) -> None:
        data: dict[str, Any] = {
            "name": "John",
            "age": 30,
        }

        result = validate_request(SampleModel, data)

        assert isinstance(result, SampleModel)
        assert result.name == "John"
        assert result.age == 30

    def test_validate_request_missing_required_field(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_request(RequiredOnlyModel, {})

        details = sanitize_validation_errors(exc_info.value.errors())

        assert details == [{"field": "name", "message": "This field is required"}]

    def test_validate_request_invalid_type(self) -> None:
        data: dict[str, Any] = {
            "name": "John",
            "age": "not-an-int",
        }

        with pytest.raises(ValidationError) as exc_info:
            validate_request(SampleModel, data)

        detail = sanitize_validation_errors(exc_info.value.errors())[0]
        assert detail["field"] == "age"
        assert detail["message"] == "Input should be a valid integer, unable to parse string as an integer"
