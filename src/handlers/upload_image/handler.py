"""
Lambda handler responsible for storing an image in a gallery section.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import (
    NotFoundError,
    UpstreamStoreError,
    ValidationError,
)
from core.services.gallery_service import get_gallery_service
from core.utils.auth import require_operator
from core.utils.constants import (
    METRICS_NAMESPACE,
    UPLOAD_FILE_FIELD,
    UPLOAD_FILENAME_FIELD,
    UPLOAD_SECTION_FIELD,
)
from core.utils.decorators import api_gateway_handler
from core.utils.request import (
    decode_base64,
    is_multipart,
    parse_json_body,
    parse_multipart,
    request_log_context,
)
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import UploadImageRequest, UploadImageResponse

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


def _read_upload(event: dict[str, Any]) -> dict[str, Any]:
    """Collect upload fields from a multipart or JSON (base64) body."""
    if is_multipart(event):
        form = parse_multipart(event)
        payload: dict[str, Any] = {"sectionId": form.fields.get(UPLOAD_SECTION_FIELD)}
        upload = form.files.get(UPLOAD_FILE_FIELD)
        if upload is not None:
            payload["file"] = upload.data
            payload["filename"] = upload.file_name or ""
    else:
        body = parse_json_body(event)
        payload = {
            "sectionId": body.get(UPLOAD_SECTION_FIELD),
            "filename": body.get(UPLOAD_FILENAME_FIELD) or "",
        }
        encoded = body.get(UPLOAD_FILE_FIELD)
        if isinstance(encoded, str) and encoded:
            payload["file"] = decode_base64(encoded, field=UPLOAD_FILE_FIELD)

    return {key: value for key, value in payload.items() if value is not None}


@api_gateway_handler
@require_operator
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle POST /gallery/image.

    Accepts ``multipart/form-data`` with a ``sectionId`` field and an
    ``image`` file part, or a JSON body:
    {
        "sectionId": "summer-trip",
        "image": "<base64>",
        "filename": "beach.jpg"
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        201 with the new image reference and the updated section
    """
    logger.info("Received image upload request", extra=request_log_context(event, context))

    try:
        payload = _read_upload(event)
    except ValidationError as exc:
        logger.warning("Unreadable upload body", extra={"error": exc.message})
        return ResponseBuilder.from_error(exc)

    if "file" not in payload:
        return ResponseBuilder.bad_request(message="No image file provided")

    try:
        request = validate_request(UploadImageRequest, payload)
    except PydanticValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors(include_input=False)},
        )
        return ResponseBuilder.bad_request(
            message="Invalid upload request",
            details={"errors": sanitize_validation_errors(exc.errors(include_input=False))},
        )

    try:
        image, section = get_gallery_service().upload_image(
            section_id=request.section_id,
            file_data=request.file,
            file_name=request.file_name,
            content_type=request.mime_type,
        )

    except ValidationError as exc:
        logger.warning(
            "Upload rejected",
            extra={"section_id": request.section_id, "error": exc.message},
        )
        return ResponseBuilder.from_error(exc)

    except NotFoundError as exc:
        logger.warning("Section not found for upload", extra={"section_id": request.section_id})
        return ResponseBuilder.from_error(exc)

    except UpstreamStoreError as exc:
        logger.exception(
            "Infrastructure error during image upload",
            extra={"section_id": request.section_id},
        )
        return ResponseBuilder.from_error(exc)

    metrics.add_metric(name="ImageUploaded", unit=MetricUnit.Count, value=1)

    response = UploadImageResponse(
        message="Image uploaded successfully",
        image=image,
        section=section.to_record(),
    )

    return ResponseBuilder.created(response.model_dump())
