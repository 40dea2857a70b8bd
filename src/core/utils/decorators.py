"""
Common decorators and helpers for API Gateway Lambda handlers.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import ErrorKind, GalleryServiceError
from core.utils.response import ResponseBuilder

logger = Logger(service="api-gateway-handler", utc=True)

JsonDict = dict[str, Any]


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Answers CORS preflight (OPTIONS) without calling the handler. Gallery
    errors that escape the handler are mapped by their kind; anything else
    becomes a generic 500 so internal details never reach the caller.

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"status": "OK"})
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)
        log_extra = {"handler": func.__name__, "request_id": request_id}

        try:
            return func(event, context)

        except GalleryServiceError as exc:
            log_extra.update(error_code=exc.error_code, error_type=type(exc).__name__)
            if exc.kind is ErrorKind.UPSTREAM_STORE:
                logger.exception("Unhandled gallery error in handler", extra=log_extra)
            else:
                logger.warning("Unhandled gallery error in handler", extra=log_extra)
            return ResponseBuilder.from_error(
                exc,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except Exception as exc:
            log_extra.update(error=str(exc), error_type=type(exc).__name__)
            logger.exception("Unexpected error in handler", extra=log_extra)
            return ResponseBuilder.internal_error(
                "We're experiencing technical difficulties. Please try again in a few moments.",
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper
