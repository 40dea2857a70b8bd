"""
Lambda handler responsible for deleting a section and all of its images.
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

from .models import DeleteSectionRequest, DeleteSectionResponse

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@require_operator
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle DELETE /gallery/section/{section_id}.

    Every image under the section prefix is purged before the record is
    removed.
    """
    logger.info("Received section delete request", extra=request_log_context(event, context))

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            DeleteSectionRequest,
            {"section_id": path_params.get("section_id")},
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
        purged = get_gallery_service().delete_section(request.section_id)

    except NotFoundError as exc:
        logger.warning("Section not found during delete", extra={"section_id": request.section_id})
        return ResponseBuilder.from_error(exc)

    except UpstreamStoreError as exc:
        logger.exception("Section deletion failed", extra={"section_id": request.section_id})
        return ResponseBuilder.from_error(exc)

    metrics.add_metric(name="SectionDeleted", unit=MetricUnit.Count, value=1)
    logger.info(
        "Section deleted",
        extra={"section_id": request.section_id, "purged_images": purged},
    )

    response = DeleteSectionResponse(message="Section deleted successfully")
    return ResponseBuilder.ok(response.model_dump())
