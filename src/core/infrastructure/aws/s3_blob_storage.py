"""S3-backed implementation of BlobRepository."""

import os
from pathlib import PurePosixPath
import re
import uuid

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import BlobStoreError
from core.models.section import StoredBlob
from core.repositories.blob_repository import BlobRepository
from core.utils.constants import (
    ENV_GALLERY_PUBLIC_URL_BASE,
    ERROR_CODE_BLOB_DELETE_FAILED,
    ERROR_CODE_BLOB_KEY_UNRESOLVED,
    ERROR_CODE_BLOB_LIST_FAILED,
    ERROR_CODE_BLOB_UPLOAD_FAILED,
    S3_PUBLIC_READ_ACL,
    default_extension_for,
)

logger = Logger(utc=True)

_EXTENSION_PATTERN = re.compile(r"^[a-z0-9]{1,10}$")


class S3BlobStorage(BlobRepository):
    """Image blob storage backed by Amazon S3 with public-read objects."""

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter()

        base = os.getenv(ENV_GALLERY_PUBLIC_URL_BASE)
        if not base:
            base = f"https://{self._s3.bucket_name}.s3.{self._s3.region}.amazonaws.com"
        self._public_url_base = base.rstrip("/")

    @staticmethod
    def section_prefix(section_id: str) -> str:
        return f"{section_id}/"

    def url_for_key(self, key: str) -> str:
        """Build the public retrieval URL for an object key."""
        return f"{self._public_url_base}/{key}"

    def key_from_url(self, url: str) -> str:
        root = f"{self._public_url_base}/"
        if url.startswith(root) and len(url) > len(root):
            return url[len(root) :]

        # Path-style URLs: https://s3.<region>.amazonaws.com/<bucket>/<key>
        marker = f"/{self._s3.bucket_name}/"
        if marker in url:
            key = url.split(marker, 1)[1]
            if key:
                return key

        logger.error("Unable to resolve object key from URL", extra={"url": url})
        raise BlobStoreError(
            message="Image URL does not belong to this store",
            error_code=ERROR_CODE_BLOB_KEY_UNRESOLVED,
            details={"url": url},
        )

    def put(
        self,
        *,
        section_id: str,
        file_data: bytes,
        content_type: str,
        file_name: str,
    ) -> StoredBlob:
        """Upload image bytes under a fresh key and return its location."""
        token = str(uuid.uuid4())
        extension = self._get_extension(file_name, content_type)
        key = f"{self.section_prefix(section_id)}{token}.{extension}"

        logger.debug(
            "Uploading image",
            extra={
                "section_id": section_id,
                "key": key,
                "size": len(file_data),
                "content_type": content_type,
            },
        )

        try:
            self._s3.put_object(
                key=key,
                body=file_data,
                content_type=content_type,
                acl=S3_PUBLIC_READ_ACL,
            )
            logger.info("Image uploaded successfully", extra={"key": key})
            return StoredBlob(token=token, key=key, url=self.url_for_key(key))

        except ClientError as exc:
            logger.error("S3 upload failed", extra={"key": key})
            raise BlobStoreError(
                message="Unable to upload image at this time",
                error_code=ERROR_CODE_BLOB_UPLOAD_FAILED,
                details={"section_id": section_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error uploading image")
            raise BlobStoreError(
                message="Unable to upload image at this time",
                error_code=ERROR_CODE_BLOB_UPLOAD_FAILED,
                details={"section_id": section_id},
            ) from exc

    def delete(self, *, url: str) -> None:
        """Delete the object behind ``url``."""
        key = self.key_from_url(url)
        logger.debug("Deleting image", extra={"key": key})

        try:
            self._s3.delete_object(key=key)
            logger.info("Image deleted successfully", extra={"key": key})

        except ClientError as exc:
            logger.error("S3 deletion failed", extra={"key": key})
            raise BlobStoreError(
                message="Unable to delete image at this time",
                error_code=ERROR_CODE_BLOB_DELETE_FAILED,
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting image")
            raise BlobStoreError(
                message="Unable to delete image at this time",
                error_code=ERROR_CODE_BLOB_DELETE_FAILED,
                details={"key": key},
            ) from exc

    def delete_prefix(self, *, section_id: str) -> int:
        """Purge every object stored for a section."""
        keys = self.list_keys(section_id=section_id)

        if not keys:
            logger.info("No objects to purge", extra={"section_id": section_id})
            return 0

        logger.debug(
            "Purging section objects",
            extra={"section_id": section_id, "count": len(keys)},
        )

        try:
            errors = self._s3.delete_objects(keys=keys)

        except ClientError as exc:
            logger.error("S3 bulk deletion failed", extra={"section_id": section_id})
            raise BlobStoreError(
                message="Unable to delete section images at this time",
                error_code=ERROR_CODE_BLOB_DELETE_FAILED,
                details={"section_id": section_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error purging section objects")
            raise BlobStoreError(
                message="Unable to delete section images at this time",
                error_code=ERROR_CODE_BLOB_DELETE_FAILED,
                details={"section_id": section_id},
            ) from exc

        if errors:
            logger.error(
                "S3 bulk deletion partially failed",
                extra={
                    "section_id": section_id,
                    "failed_keys": [error.get("Key") for error in errors],
                },
            )
            raise BlobStoreError(
                message="Unable to delete section images at this time",
                error_code=ERROR_CODE_BLOB_DELETE_FAILED,
                details={"section_id": section_id, "failed": len(errors)},
            )

        logger.info(
            "Section objects purged",
            extra={"section_id": section_id, "count": len(keys)},
        )
        return len(keys)

    def list_keys(self, *, section_id: str) -> list[str]:
        prefix = self.section_prefix(section_id)

        try:
            return self._s3.list_keys(prefix=prefix)

        except ClientError as exc:
            logger.error("S3 listing failed", extra={"prefix": prefix})
            raise BlobStoreError(
                message="Unable to list section images at this time",
                error_code=ERROR_CODE_BLOB_LIST_FAILED,
                details={"section_id": section_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error listing section objects")
            raise BlobStoreError(
                message="Unable to list section images at this time",
                error_code=ERROR_CODE_BLOB_LIST_FAILED,
                details={"section_id": section_id},
            ) from exc

    @staticmethod
    def _get_extension(file_name: str, content_type: str) -> str:
        """Return the original file extension, or the one registered for the MIME type."""
        suffix = PurePosixPath(file_name or "").suffix.lstrip(".").lower()
        if _EXTENSION_PATTERN.match(suffix):
            return suffix
        return default_extension_for(content_type)
