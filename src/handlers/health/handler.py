"""
Lambda handler for GET /health.
"""

from typing import Any

from aws_lambda_powertools import Logger, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.utils.constants import HEALTH_STATUS_OK
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.time import utc_now_iso

from .models import HealthResponse

logger = Logger(utc=True)
tracer = Tracer()


@api_gateway_handler
@tracer.capture_lambda_handler
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Report liveness. Touches neither store."""
    logger.debug("Health check", extra={"path": event.get("path")})

    response = HealthResponse(status=HEALTH_STATUS_OK, timestamp=utc_now_iso())
    return ResponseBuilder.ok(response.model_dump())
