"""
Lambda handler responsible for creating a gallery section.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import (
    AlreadyExistsError,
    UpstreamStoreError,
    ValidationError,
)
from core.services.gallery_service import get_gallery_service
from core.utils.auth import require_operator
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.request import parse_json_body, request_log_context
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import CreateSectionRequest

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@require_operator
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle POST /gallery/section.

    Expected body:
    {
        "name": "Summer Trip!"
    }

    The section id is derived from the name ("summer-trip"). A name that
    derives to an existing id is rejected with 400.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        201 with the created section record
    """
    logger.info("Received section create request", extra=request_log_context(event, context))

    try:
        body = parse_json_body(event)
        request = validate_request(CreateSectionRequest, body)
    except ValidationError as exc:
        logger.warning("Invalid request body", extra={"error": exc.message})
        return ResponseBuilder.from_error(exc)
    except PydanticValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.bad_request(
            message="Invalid section name",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    try:
        section = get_gallery_service().create_section(request.name)

    except ValidationError as exc:
        logger.warning("Section name rejected", extra={"section_name": request.name})
        return ResponseBuilder.from_error(exc)

    except AlreadyExistsError as exc:
        logger.info(
            "Section already exists",
            extra={"section_id": exc.details.get("section_id")},
        )
        return ResponseBuilder.from_error(exc)

    except UpstreamStoreError as exc:
        logger.exception("Failed to create section", extra={"section_name": request.name})
        return ResponseBuilder.from_error(exc)

    metrics.add_metric(name="SectionCreated", unit=MetricUnit.Count, value=1)

    return ResponseBuilder.created(section.to_record())
