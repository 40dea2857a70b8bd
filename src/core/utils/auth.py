"""Operator credential gate for write routes.

A single operator identity is configured through ``ADMIN_USERNAME`` and
``ADMIN_PASSWORD``. Credentials are accepted as an HTTP Basic
``Authorization`` header or, when no header is sent, as ``username`` and
``password`` fields of a JSON or multipart form body.
"""

from __future__ import annotations

import base64
import binascii
import hmac
import os
from collections.abc import Callable
from functools import wraps
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import AuthError, ValidationError
from core.utils.constants import (
    ENV_ADMIN_PASSWORD,
    ENV_ADMIN_USERNAME,
    ERROR_CODE_AUTH_REQUIRED,
    ERROR_CODE_INVALID_CREDENTIALS,
)
from core.utils.request import get_header, is_multipart, parse_json_body, parse_multipart
from core.utils.response import ResponseBuilder

logger = Logger(utc=True)

JsonDict = dict[str, Any]

_BASIC_PREFIX = "basic "


def _operator_identity() -> tuple[str, str]:
    username = os.getenv(ENV_ADMIN_USERNAME)
    password = os.getenv(ENV_ADMIN_PASSWORD)
    if not username or not password:
        raise RuntimeError(
            f"{ENV_ADMIN_USERNAME} and {ENV_ADMIN_PASSWORD} environment variables must be set"
        )
    return username, password


def verify_credentials(username: str, password: str) -> bool:
    """Compare credentials with the operator identity in constant time."""
    expected_username, expected_password = _operator_identity()

    username_ok = hmac.compare_digest(username.encode("utf-8"), expected_username.encode("utf-8"))
    password_ok = hmac.compare_digest(password.encode("utf-8"), expected_password.encode("utf-8"))
    return username_ok and password_ok


def _credentials_from_header(header: str) -> tuple[str, str]:
    if not header.lower().startswith(_BASIC_PREFIX):
        raise AuthError(message="Authentication required")

    encoded = header[len(_BASIC_PREFIX) :].strip()
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise AuthError(
            message="Invalid credentials",
            error_code=ERROR_CODE_INVALID_CREDENTIALS,
        ) from exc

    username, separator, password = decoded.partition(":")
    if not separator:
        raise AuthError(
            message="Invalid credentials",
            error_code=ERROR_CODE_INVALID_CREDENTIALS,
        )
    return username, password


def _credentials_from_body(event: JsonDict) -> tuple[str, str]:
    body: JsonDict
    try:
        body = dict(parse_multipart(event).fields) if is_multipart(event) else parse_json_body(event)
    except ValidationError:
        body = {}

    username = body.get("username")
    password = body.get("password")

    if username is None and password is None:
        raise AuthError(message="Authentication required")

    if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
        raise AuthError(
            message="Username and password required",
            error_code=ERROR_CODE_AUTH_REQUIRED,
        )

    return username, password


def authenticate_request(event: JsonDict) -> str:
    """Authenticate the operator behind an API Gateway event.

    Returns:
        The authenticated username

    Raises:
        AuthError: If credentials are missing or do not match
        RuntimeError: If the operator identity is not configured
    """
    header = get_header(event, "Authorization")
    username, password = (
        _credentials_from_header(header) if header else _credentials_from_body(event)
    )

    if not verify_credentials(username, password):
        logger.warning("Rejected operator credentials", extra={"path": event.get("path")})
        raise AuthError(
            message="Invalid credentials",
            error_code=ERROR_CODE_INVALID_CREDENTIALS,
        )

    return username


def require_operator(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """Reject the request with 401 unless operator credentials are valid."""

    @wraps(func)
    def wrapper(event: Any, context: Any, *args: Any, **kwargs: Any) -> JsonDict:
        try:
            authenticate_request(event)
        except AuthError as exc:
            logger.info(
                "Authentication failed",
                extra={"path": event.get("path"), "reason": exc.message},
            )
            return ResponseBuilder.from_error(
                exc,
                request_id=getattr(context, "aws_request_id", None),
            )

        return func(event, context, *args, **kwargs)

    return wrapper
