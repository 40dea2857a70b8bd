import base64
import json
import os
from types import SimpleNamespace
from typing import Any

import pytest


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


@pytest.fixture
def auth_headers(make_basic_auth) -> dict[str, str]:
    return {
        "Authorization": make_basic_auth(os.environ["ADMIN_USERNAME"], os.environ["ADMIN_PASSWORD"]),
    }


@pytest.fixture
def list_sections_event() -> dict[str, Any]:
    return {"httpMethod": "GET", "path": "/gallery", "headers": {}}


@pytest.fixture
def create_section_event(auth_headers) -> dict[str, Any]:
    return {
        "httpMethod": "POST",
        "path": "/gallery/section",
        "headers": {"Content-Type": "application/json", **auth_headers},
        "body": json.dumps({"name": "Summer Trip!"}),
    }


@pytest.fixture
def upload_image_event(auth_headers, sample_image_binary) -> dict[str, Any]:
    return {
        "httpMethod": "POST",
        "path": "/gallery/image",
        "headers": {"Content-Type": "application/json", **auth_headers},
        "body": json.dumps(
            {
                "sectionId": "summer-trip",
                "image": base64.b64encode(sample_image_binary).decode("utf-8"),
                "filename": "beach.png",
            }
        ),
    }


@pytest.fixture
def multipart_upload_event(auth_headers, sample_jpeg_binary, make_multipart) -> dict[str, Any]:
    body, content_type = make_multipart(
        {"sectionId": "summer-trip"},
        {"image": ("sunset.jpg", sample_jpeg_binary, "image/jpeg")},
    )
    return {
        "httpMethod": "POST",
        "path": "/gallery/image",
        "headers": {"content-type": content_type, **auth_headers},
        "body": base64.b64encode(body).decode("utf-8"),
        "isBase64Encoded": True,
    }


@pytest.fixture
def delete_section_event(auth_headers) -> dict[str, Any]:
    return {
        "httpMethod": "DELETE",
        "path": "/gallery/section/summer-trip",
        "pathParameters": {"section_id": "summer-trip"},
        "headers": dict(auth_headers),
    }


@pytest.fixture
def delete_image_event(auth_headers) -> dict[str, Any]:
    return {
        "httpMethod": "DELETE",
        "path": "/gallery/image/summer-trip/img-1",
        "pathParameters": {"section_id": "summer-trip", "image_id": "img-1"},
        "headers": dict(auth_headers),
    }
