"""
Pytest configuration and fixtures for gallery-service tests.
Provides AWS mocking plus DynamoDB and S3 fixtures and record builders.
"""

import base64
import os
from collections.abc import Callable
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

os.environ["AWS_REGION"] = "us-east-1"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["GALLERY_TABLE_NAME"] = "gallery-sections-test"
os.environ["GALLERY_S3_BUCKET_NAME"] = "gallery-images-test"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "s3cret"
os.environ["POWERTOOLS_TRACE_DISABLED"] = "true"
os.environ["POWERTOOLS_METRICS_NAMESPACE"] = "GalleryServiceTest"

# Tests must never reach a real endpoint or CDN root.
os.environ.pop("AWS_ENDPOINT_URL", None)
os.environ.pop("GALLERY_PUBLIC_URL_BASE", None)

from core.services.gallery_service import get_gallery_service  # noqa: E402

PARTITION_KEY = "sectionId"


@pytest.fixture(autouse=True)
def reset_gallery_service():
    """Drop the process-wide service so every test builds clients inside its own mock."""
    get_gallery_service.cache_clear()
    yield
    get_gallery_service.cache_clear()


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


def _create_dynamodb_table(dynamodb_resource):
    """Helper to create the sections table."""
    return dynamodb_resource.create_table(
        TableName=os.getenv("GALLERY_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": PARTITION_KEY, "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": PARTITION_KEY, "AttributeType": "S"}],
    )


@pytest.fixture(scope="function")
def dynamodb_table(dynamodb_resource):
    """
    Create the sections table for testing.

    moto discards the table when the mock context exits.
    """
    table_name = os.getenv("GALLERY_TABLE_NAME")

    try:
        table = dynamodb_resource.Table(table_name)
        table.load()
    except ClientError:
        table = _create_dynamodb_table(dynamodb_resource)
        table.wait_until_exists()

    yield table


@pytest.fixture
def dynamodb_put_item(dynamodb_table) -> Callable[[dict[str, Any]], dict[str, Any]]:
    """
    Helper to insert a single section record.

    Usage:
        item = dynamodb_put_item(section_record("summer-trip"))
    """

    def _put(item: dict[str, Any]) -> dict[str, Any]:
        dynamodb_table.put_item(Item=item)
        return item

    return _put


@pytest.fixture
def dynamodb_get_item(dynamodb_table) -> Callable[[str], dict[str, Any] | None]:
    """
    Helper to read a section record.

    Usage:
        item = dynamodb_get_item("summer-trip")
    """

    def _get(section_id: str) -> dict[str, Any] | None:
        response: dict[str, Any] = dynamodb_table.get_item(Key={PARTITION_KEY: section_id})
        item: dict[str, Any] | None = response.get("Item")
        return item

    return _get


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """Create the image bucket for testing."""
    bucket_name = os.getenv("GALLERY_S3_BUCKET_NAME")

    try:
        s3_client.head_bucket(Bucket=bucket_name)
    except ClientError:
        s3_client.create_bucket(Bucket=bucket_name, ObjectOwnership="ObjectWriter")

    yield s3_client


@pytest.fixture
def s3_put_object(s3_bucket) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("summer-trip/abc.jpg", image_bytes, "image/jpeg")
    """

    def _put(key: str, body: bytes = b"data", content_type: str = "application/octet-stream"):
        return s3_bucket.put_object(
            Bucket=os.getenv("GALLERY_S3_BUCKET_NAME"),
            Key=key,
            Body=body,
            ContentType=content_type,
        )

    return _put


@pytest.fixture
def s3_get_object(s3_bucket) -> Callable[[str], bytes]:
    """
    Helper to read an object body from S3.

    Usage:
        content = s3_get_object("summer-trip/abc.jpg")
    """

    def _get(key: str) -> bytes:
        response: dict[str, Any] = s3_bucket.get_object(
            Bucket=os.getenv("GALLERY_S3_BUCKET_NAME"),
            Key=key,
        )
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def s3_list_keys(s3_bucket) -> Callable[[str], list[str]]:
    """
    Helper to list keys under a prefix.

    Usage:
        keys = s3_list_keys("summer-trip/")
    """

    def _list(prefix: str = "") -> list[str]:
        response = s3_bucket.list_objects_v2(
            Bucket=os.getenv("GALLERY_S3_BUCKET_NAME"),
            Prefix=prefix,
        )
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _list


@pytest.fixture
def public_url() -> Callable[[str], str]:
    """Default public URL for an object key."""

    def _url(key: str) -> str:
        return (
            f"https://{os.getenv('GALLERY_S3_BUCKET_NAME')}"
            f".s3.{os.getenv('AWS_REGION')}.amazonaws.com/{key}"
        )

    return _url


@pytest.fixture
def section_record() -> Callable[..., dict[str, Any]]:
    """
    Build a persisted section record.

    Usage:
        item = section_record("summer-trip", images=[{"id": "a", "url": "..."}])
    """

    def _record(
        section_id: str,
        *,
        name: str | None = None,
        images: list[dict[str, str]] | None = None,
    ) -> dict[str, Any]:
        return {
            "sectionId": section_id,
            "name": name or section_id.replace("-", " ").title(),
            "images": images or [],
            "createdAt": "2024-01-01T10:00:00.000Z",
            "updatedAt": "2024-01-01T10:00:00.000Z",
        }

    return _record


@pytest.fixture
def gallery_stores(dynamodb_table, s3_bucket):
    """Both backing stores provisioned inside the mock."""
    return dynamodb_table, s3_bucket


@pytest.fixture
def make_basic_auth() -> Callable[[str, str], str]:
    """
    Helper to build a Basic Authorization header value.

    Usage:
        header = make_basic_auth("admin", "s3cret")
    """

    def _header(username: str, password: str) -> str:
        token = base64.b64encode(f"{username}:{password}".encode()).decode()
        return f"Basic {token}"

    return _header


@pytest.fixture
def make_multipart() -> Callable[..., tuple[bytes, str]]:
    """
    Helper to encode a multipart/form-data body.

    Usage:
        body, content_type = make_multipart(
            {"sectionId": "summer-trip"},
            {"image": ("a.png", png_bytes, "image/png")},
        )
    """

    def _encode(
        fields: dict[str, str],
        files: dict[str, tuple[str, bytes, str]] | None = None,
        boundary: str = "gallery-test-boundary",
    ) -> tuple[bytes, str]:
        parts: list[bytes] = []

        for name, value in fields.items():
            parts.append(
                f"--{boundary}\r\n"
                f'Content-Disposition: form-data; name="{name}"\r\n\r\n'
                f"{value}\r\n".encode()
            )

        for name, (file_name, data, content_type) in (files or {}).items():
            parts.append(
                f"--{boundary}\r\n"
                f'Content-Disposition: form-data; name="{name}"; filename="{file_name}"\r\n'
                f"Content-Type: {content_type}\r\n\r\n".encode()
                + data
                + b"\r\n"
            )

        parts.append(f"--{boundary}--\r\n".encode())
        return b"".join(parts), f"multipart/form-data; boundary={boundary}"

    return _encode


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Sample binary JPEG data (minimal valid JPEG)."""
    return (
        b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
        b"\xff\xdb\x00C\x00\x08\x06\x06\x07\x06\x05\x08\x07\x07\x07\t\t\x08\n\x0c"
        b"\x14\r\x0c\x0b\x0b\x0c\x19\x12\x13\x0f\x14\x1d\x1a\x1f\x1e\x1d\x1a\x1c"
        b"\x1c $.' \",#\x1c\x1c(7),01444\x1f'9=82<.342\xff\xc0\x00\x0b\x08"
        b"\x00\x01\x00\x01\x01\x01\x11\x00\xff\xc4\x00\x14\x00\x01\x00\x00\x00"
        b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\t\xff\xc4\x00\x14\x10"
        b"\x01\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
        b"\xff\xda\x00\x08\x01\x01\x00\x00?\x00\x7f\x00\xff\xd9"
    )
