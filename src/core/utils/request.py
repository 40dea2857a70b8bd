"""Helpers for reading API Gateway proxy events."""

import base64
import binascii
import json
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import BaseModel, Field
from python_multipart import create_form_parser
from python_multipart.exceptions import FormParserError

from core.models.errors import FileSizeError, ValidationError
from core.utils.constants import (
    ERROR_CODE_INVALID_BODY,
    MAX_FILE_SIZE,
    get_max_file_size_mb,
)

logger = Logger(utc=True)

JsonDict = dict[str, Any]


class UploadedFile(BaseModel):
    """One file part of a multipart form."""

    file_name: str | None = None
    data: bytes


class MultipartForm(BaseModel):
    """Decoded multipart/form-data body."""

    fields: dict[str, str] = Field(default_factory=dict)
    files: dict[str, UploadedFile] = Field(default_factory=dict)


def request_log_context(event: JsonDict, context: Any) -> JsonDict:
    """Structured log fields describing an incoming invocation."""
    return {
        "http_method": event.get("httpMethod"),
        "path": event.get("path"),
        "path_params": event.get("pathParameters"),
        "request_id": getattr(context, "aws_request_id", None),
        "function_name": getattr(context, "function_name", None),
        "remaining_time_ms": context.get_remaining_time_in_millis()
        if hasattr(context, "get_remaining_time_in_millis")
        else None,
    }


def get_header(event: JsonDict, name: str) -> str | None:
    """Case-insensitive header lookup."""
    headers = event.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def get_body_bytes(event: JsonDict) -> bytes:
    """Return the raw request body, decoding API Gateway base64 bodies."""
    body = event.get("body")
    if not body:
        return b""

    if event.get("isBase64Encoded"):
        return decode_base64(body, field="body")

    return body.encode("utf-8") if isinstance(body, str) else bytes(body)


def decode_base64(value: str, *, field: str) -> bytes:
    """Strictly decode a base64 string.

    Raises:
        ValidationError: If the value is not valid base64
    """
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        logger.warning("Invalid base64 data", extra={"field": field})
        raise ValidationError(
            message=f"Invalid base64 data in '{field}'",
            error_code=ERROR_CODE_INVALID_BODY,
            details={"field": field, "encoding": "base64"},
        ) from exc


def parse_json_body(event: JsonDict) -> JsonDict:
    """Parse the request body as a JSON object; an empty body yields ``{}``.

    Raises:
        ValidationError: If the body is not a JSON object
    """
    raw = get_body_bytes(event)
    if not raw.strip():
        return {}

    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationError(
            message="Invalid JSON body",
            error_code=ERROR_CODE_INVALID_BODY,
        ) from exc

    if not isinstance(body, dict):
        raise ValidationError(
            message="Request body must be a JSON object",
            error_code=ERROR_CODE_INVALID_BODY,
        )

    return body


def is_multipart(event: JsonDict) -> bool:
    content_type = get_header(event, "Content-Type") or ""
    return content_type.lower().startswith("multipart/form-data")


def parse_multipart(event: JsonDict) -> MultipartForm:
    """Decode a multipart/form-data body held entirely in memory.

    Raises:
        FileSizeError: If the body exceeds the upload limit
        ValidationError: If the body is not valid multipart data
    """
    content_type = get_header(event, "Content-Type")
    raw = get_body_bytes(event)

    # Multipart framing adds a little overhead on top of the file itself.
    if len(raw) > MAX_FILE_SIZE + 64 * 1024:
        raise FileSizeError(
            message=f"File size exceeds {get_max_file_size_mb()}MB limit",
            details={"size": len(raw)},
        )

    form = MultipartForm()

    def on_field(field: Any) -> None:
        name = _decode_name(field.field_name)
        if name:
            form.fields[name] = (field.value or b"").decode("utf-8", errors="replace")

    def on_file(file: Any) -> None:
        name = _decode_name(file.field_name)
        file_object = file.file_object
        file_object.seek(0)
        form.files[name] = UploadedFile(
            file_name=_decode_name(file.file_name) or None,
            data=file_object.read(),
        )

    try:
        parser = create_form_parser(
            {"Content-Type": content_type, "Content-Length": str(len(raw))},
            on_field,
            on_file,
            config={"MAX_MEMORY_FILE_SIZE": MAX_FILE_SIZE + 1},
        )
        parser.write(raw)
        parser.finalize()
    except (FormParserError, ValueError) as exc:
        logger.warning("Malformed multipart body", extra={"error": str(exc)})
        raise ValidationError(
            message="Invalid multipart form data",
            error_code=ERROR_CODE_INVALID_BODY,
        ) from exc

    return form


def _decode_name(value: bytes | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
