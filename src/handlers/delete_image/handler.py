"""
Lambda handler responsible for deleting one image from a section.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import NotFoundError, UpstreamStoreError
from core.services.gallery_service import get_gallery_service
from core.utils.auth import require_operator
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.request import request_log_context
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DeleteImageRequest, DeleteImageResponse

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@require_operator
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle DELETE /gallery/image/{section_id}/{image_id}.

    This function:
    - Extracts both identifiers from API Gateway path parameters
    - Deletes the stored object, then the reference in the section
    - Translates each failure kind into an HTTP response

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        200 with the updated section
    """
    logger.info("Received image delete request", extra=request_log_context(event, context))

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            DeleteImageRequest,
            {
                "section_id": path_params.get("section_id"),
                "image_id": path_params.get("image_id"),
            },
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.bad_request(
            message="Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    try:
        section = get_gallery_service().delete_image(request.section_id, request.image_id)

    except NotFoundError as exc:
        logger.warning(
            "Section or image not found during delete",
            extra={"section_id": request.section_id, "image_id": request.image_id},
        )
        return ResponseBuilder.from_error(exc)

    except UpstreamStoreError as exc:
        logger.exception(
            "Image deletion failed",
            extra={"section_id": request.section_id, "image_id": request.image_id},
        )
        return ResponseBuilder.from_error(exc)

    metrics.add_metric(name="ImageDeleted", unit=MetricUnit.Count, value=1)

    response = DeleteImageResponse(
        message="Image deleted successfully",
        section=section.to_record(),
    )

    return ResponseBuilder.ok(response.model_dump())
