"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_INVALID_SECTION_NAME = "INVALID_SECTION_NAME"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"
ERROR_CODE_INVALID_BODY = "INVALID_BODY"

# Auth Errors
ERROR_CODE_AUTH_REQUIRED = "AUTHENTICATION_REQUIRED"
ERROR_CODE_INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_SECTION_NOT_FOUND = "SECTION_NOT_FOUND"
ERROR_CODE_IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"

# Conflict Errors
ERROR_CODE_SECTION_ALREADY_EXISTS = "SECTION_ALREADY_EXISTS"

# Upstream Store Errors
ERROR_CODE_UPSTREAM_STORE = "UPSTREAM_STORE_ERROR"

# Blob Store / S3 Errors
ERROR_CODE_S3 = "S3_ERROR"
ERROR_CODE_BLOB_UPLOAD_FAILED = "BLOB_UPLOAD_FAILED"
ERROR_CODE_BLOB_DELETE_FAILED = "BLOB_DELETE_FAILED"
ERROR_CODE_BLOB_LIST_FAILED = "BLOB_LIST_FAILED"
ERROR_CODE_BLOB_KEY_UNRESOLVED = "BLOB_KEY_UNRESOLVED"

# Document Store / DynamoDB Errors
ERROR_CODE_DYNAMODB = "DYNAMODB_ERROR"
ERROR_CODE_SECTION_LIST_FAILED = "SECTION_LIST_FAILED"
ERROR_CODE_SECTION_FETCH_FAILED = "SECTION_FETCH_FAILED"
ERROR_CODE_SECTION_CREATE_FAILED = "SECTION_CREATE_FAILED"
ERROR_CODE_SECTION_UPDATE_FAILED = "SECTION_UPDATE_FAILED"
ERROR_CODE_SECTION_DELETE_FAILED = "SECTION_DELETE_FAILED"
ERROR_CODE_SECTION_INVALID_FORMAT = "SECTION_INVALID_FORMAT"


# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB in bytes

MIME_TYPE_EXTENSION_MAP: Final[dict[str, tuple[str, ...]]] = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/gif": ("gif",),
    "image/webp": ("webp",),
}

ALLOWED_MIME_TYPES: Final[frozenset[str]] = frozenset(MIME_TYPE_EXTENSION_MAP.keys())

# Multipart / JSON upload field names
UPLOAD_SECTION_FIELD = "sectionId"
UPLOAD_FILE_FIELD = "image"
UPLOAD_FILENAME_FIELD = "filename"


# ============================================================================
# Storage Layout
# ============================================================================

SECTION_TABLE_PARTITION_KEY = "sectionId"
S3_PUBLIC_READ_ACL = "public-read"
S3_DELETE_BATCH_SIZE = 1000  # DeleteObjects hard limit


# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization"
EXPOSE_HEADERS = "Content-Type,Content-Length"
DEFAULT_CONTENT_TYPE = "application/json"

HEALTH_STATUS_OK = "OK"


# ============================================================================
# Observability
# ============================================================================

METRICS_NAMESPACE = "GalleryService"


# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_GALLERY_TABLE_NAME = "GALLERY_TABLE_NAME"
ENV_GALLERY_S3_BUCKET_NAME = "GALLERY_S3_BUCKET_NAME"
ENV_GALLERY_PUBLIC_URL_BASE = "GALLERY_PUBLIC_URL_BASE"
ENV_ADMIN_USERNAME = "ADMIN_USERNAME"
ENV_ADMIN_PASSWORD = "ADMIN_PASSWORD"

DEFAULT_AWS_REGION = "us-east-1"


# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)


def default_extension_for(mime_type: str) -> str:
    """Return the canonical file extension for an allowed MIME type."""
    extensions = MIME_TYPE_EXTENSION_MAP.get(mime_type)
    return extensions[0] if extensions else "bin"
