"""Thin adapter for interacting with Amazon S3."""

from collections.abc import Iterator, Mapping, Sequence
import os
from typing import Any, Protocol

import boto3

from core.utils.constants import (
    DEFAULT_AWS_REGION,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_GALLERY_S3_BUCKET_NAME,
    S3_DELETE_BATCH_SIZE,
)


class _Paginator(Protocol):
    def paginate(self, **kwargs: Any) -> Iterator[Mapping[str, Any]]: ...


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def put_object(
        self,
        *,
        Bucket: str,
        Key: str,
        Body: bytes,
        ContentType: str,
        **kwargs: Any,
    ) -> Any: ...

    def delete_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Any: ...

    def delete_objects(
        self,
        *,
        Bucket: str,
        Delete: Mapping[str, Any],
    ) -> Mapping[str, Any]: ...

    def get_paginator(self, operation_name: str) -> _Paginator: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (repository-facing)."""

    bucket_name: str
    region: str

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        acl: str | None = None,
    ) -> None: ...

    def delete_object(self, *, key: str) -> None: ...

    def delete_objects(self, *, keys: Sequence[str]) -> list[dict[str, Any]]: ...

    def list_keys(self, *, prefix: str) -> list[str]: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self) -> None:
        """Create S3 client from environment configuration."""
        bucket_name = os.getenv(ENV_GALLERY_S3_BUCKET_NAME)
        if not bucket_name:
            raise RuntimeError(f"{ENV_GALLERY_S3_BUCKET_NAME} environment variable is not set")

        self.bucket_name = bucket_name
        self.region = os.getenv(ENV_AWS_REGION, DEFAULT_AWS_REGION)
        self._client: _Boto3S3Client = boto3.client(
            "s3",
            endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
            region_name=self.region,
        )

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        acl: str | None = None,
    ) -> None:
        """Store object in S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        extra: dict[str, Any] = {}
        if acl:
            extra["ACL"] = acl

        self._client.put_object(
            Bucket=self.bucket_name,
            Key=key,
            Body=body,
            ContentType=content_type,
            **extra,
        )

    def delete_object(self, *, key: str) -> None:
        """Delete object from S3 (absent keys are not an error).
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.delete_object(
            Bucket=self.bucket_name,
            Key=key,
        )

    def delete_objects(self, *, keys: Sequence[str]) -> list[dict[str, Any]]:
        """Bulk delete keys in batches and return any per-key errors.
        Raises boto3 exceptions - caught by domain implementation.
        """
        errors: list[dict[str, Any]] = []

        for start in range(0, len(keys), S3_DELETE_BATCH_SIZE):
            batch = keys[start : start + S3_DELETE_BATCH_SIZE]
            response = self._client.delete_objects(
                Bucket=self.bucket_name,
                Delete={
                    "Objects": [{"Key": key} for key in batch],
                    "Quiet": True,
                },
            )
            errors.extend(response.get("Errors", []))

        return errors

    def list_keys(self, *, prefix: str) -> list[str]:
        """List every key under ``prefix`` across all result pages.
        Raises boto3 exceptions - caught by domain implementation.
        """
        paginator = self._client.get_paginator("list_objects_v2")
        keys: list[str] = []

        for page in paginator.paginate(Bucket=self.bucket_name, Prefix=prefix):
            keys.extend(obj["Key"] for obj in page.get("Contents", []))

        return keys
