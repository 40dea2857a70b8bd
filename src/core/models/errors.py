"""Custom exception classes for the gallery service.

Every error carries an ``ErrorKind`` so the access boundary can map it to an
HTTP status without inspecting store-specific details.
"""

from enum import Enum
from typing import Any, ClassVar

from core.utils.constants import (
    ERROR_CODE_AUTH_REQUIRED,
    ERROR_CODE_DYNAMODB,
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_S3,
    ERROR_CODE_SECTION_ALREADY_EXISTS,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
    ERROR_CODE_UPSTREAM_STORE,
    ERROR_CODE_VALIDATION_FAILED,
)


class ErrorKind(str, Enum):
    """Failure categories surfaced by gallery operations."""

    VALIDATION = "validation"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    UPSTREAM_STORE = "upstream_store"


class GalleryServiceError(Exception):
    """
    Base exception for all gallery service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.UPSTREAM_STORE

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(GalleryServiceError):
    """Raised when request validation fails."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class MIMETypeError(ValidationError):
    """Raised when an unsupported MIME type is provided."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UNSUPPORTED_MIME_TYPE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class FileSizeError(ValidationError):
    """Raised when file size exceeds the allowed limit."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_FILE_SIZE_EXCEEDED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class AuthError(GalleryServiceError):
    """Raised when operator credentials are missing or invalid."""

    kind = ErrorKind.AUTH

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_AUTH_REQUIRED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class NotFoundError(GalleryServiceError):
    """Raised when a requested section or image is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class AlreadyExistsError(GalleryServiceError):
    """Raised when a section id derivation collides with an existing section."""

    kind = ErrorKind.ALREADY_EXISTS

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_SECTION_ALREADY_EXISTS,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class UpstreamStoreError(GalleryServiceError):
    """Raised when a backing store call fails for infrastructure reasons."""

    kind = ErrorKind.UPSTREAM_STORE

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UPSTREAM_STORE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class BlobStoreError(UpstreamStoreError):
    """Raised when an S3 operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_S3,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class DocumentStoreError(UpstreamStoreError):
    """Raised when a DynamoDB operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_DYNAMODB,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
