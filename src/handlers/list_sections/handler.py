"""
Lambda handler returning every gallery section (public route).
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import UpstreamStoreError
from core.services.gallery_service import get_gallery_service
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.request import request_log_context
from core.utils.response import ResponseBuilder

from .models import ListSectionsResponse

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle GET /gallery.

    Returns a JSON array of sections in no particular order; an empty gallery
    yields ``[]``. No authentication is required.
    """
    logger.info("Received section list request", extra=request_log_context(event, context))

    try:
        sections = get_gallery_service().list_sections()
    except UpstreamStoreError as exc:
        logger.exception("Failed to list sections")
        return ResponseBuilder.from_error(exc)

    response = ListSectionsResponse(sections)
    return ResponseBuilder.ok(response.model_dump(by_alias=True))
