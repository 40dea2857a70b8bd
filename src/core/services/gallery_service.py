"""Section/image consistency service.

Coordinates the section store and the blob store across create, upload and
delete operations. The two stores are not transactional; every multi-step
operation orders its writes so that a partial failure can only leave an
unreferenced blob behind, never a reference to a missing blob.
"""

from collections.abc import Callable
from functools import lru_cache
from typing import Any, TypeVar

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_sections import DynamoDBSections
from core.infrastructure.aws.s3_blob_storage import S3BlobStorage
from core.models.errors import (
    AlreadyExistsError,
    BlobStoreError,
    FileSizeError,
    GalleryServiceError,
    MIMETypeError,
    NotFoundError,
    UpstreamStoreError,
    ValidationError,
)
from core.models.section import Image, ReconcileReport, Section
from core.repositories.blob_repository import BlobRepository
from core.repositories.section_repository import SectionRepository
from core.utils.constants import (
    ALLOWED_MIME_TYPES,
    ERROR_CODE_IMAGE_NOT_FOUND,
    ERROR_CODE_INVALID_SECTION_NAME,
    ERROR_CODE_SECTION_NOT_FOUND,
    MAX_FILE_SIZE,
    get_max_file_size_mb,
)
from core.utils.slug import derive_section_id

T = TypeVar("T")

logger = Logger(utc=True)


class GalleryService:
    """Application service owning the section/image consistency rules.

    This service orchestrates:
    - Section creation with id derivation and uniqueness checks
    - Image upload (blob write, then list append)
    - Image deletion (blob delete, then positional removal by re-resolved index)
    - Section deletion (prefix purge, then record delete)
    - Reconciliation of stray blobs left behind by partial failures

    It does not perform low-level infrastructure operations directly.
    """

    def __init__(
        self,
        *,
        sections: SectionRepository | None = None,
        blobs: BlobRepository | None = None,
    ) -> None:
        """Initialize the service with its store dependencies."""
        self.sections: SectionRepository = sections or DynamoDBSections()
        self.blobs: BlobRepository = blobs or S3BlobStorage()

    @staticmethod
    def _store_call(operation: str, call: Callable[[], T], **context: Any) -> T:
        """Run a store call, re-signalling non-domain failures as UpstreamStoreError."""
        try:
            return call()
        except GalleryServiceError:
            raise
        except Exception as exc:
            logger.exception(
                "Unexpected store failure",
                extra={"operation": operation, **context},
            )
            raise UpstreamStoreError(
                message=f"Unable to {operation} at this time",
                details=context,
            ) from exc

    def _require_section(self, section_id: str) -> Section:
        section = self._store_call(
            "fetch section",
            lambda: self.sections.get_section(section_id=section_id),
            section_id=section_id,
        )
        if section is None:
            logger.warning("Section not found", extra={"section_id": section_id})
            raise NotFoundError(
                message="Section not found",
                error_code=ERROR_CODE_SECTION_NOT_FOUND,
                details={"section_id": section_id},
            )
        return section

    def list_sections(self) -> list[Section]:
        """Return every section (unordered)."""
        return self._store_call("list sections", self.sections.list_sections)

    def get_section(self, section_id: str) -> Section | None:
        """Return one section, or None when absent."""
        return self._store_call(
            "fetch section",
            lambda: self.sections.get_section(section_id=section_id),
            section_id=section_id,
        )

    def create_section(self, name: str) -> Section:
        """Create an empty section whose id is derived from ``name``.

        Raises:
            ValidationError: If the name is empty or derives to an empty id
            AlreadyExistsError: If a section with the derived id exists
            UpstreamStoreError: If a store call fails
        """
        display_name = (name or "").strip()
        if not display_name:
            raise ValidationError(
                message="Section name is required",
                error_code=ERROR_CODE_INVALID_SECTION_NAME,
            )

        section_id = derive_section_id(display_name)
        if not section_id:
            raise ValidationError(
                message="Section name must contain at least one letter or digit",
                error_code=ERROR_CODE_INVALID_SECTION_NAME,
                details={"name": display_name},
            )

        logger.debug(
            "Creating section",
            extra={"section_id": section_id, "section_name": display_name},
        )

        # Check-then-act; the conditional put in the store catches the lost race.
        if self.get_section(section_id) is not None:
            logger.info("Section already exists", extra={"section_id": section_id})
            raise AlreadyExistsError(
                message="Section already exists",
                details={"section_id": section_id},
            )

        section = self._store_call(
            "create section",
            lambda: self.sections.create_section(section_id=section_id, name=display_name),
            section_id=section_id,
        )

        logger.info("Section created", extra={"section_id": section_id})
        return section

    def upload_image(
        self,
        *,
        section_id: str,
        file_data: bytes,
        file_name: str,
        content_type: str,
    ) -> tuple[Image, Section]:
        """Store an image blob and append its reference to the section.

        The flow is:
        1. Validate the content type and size
        2. Confirm the section exists
        3. Write the blob
        4. Append the reference in one atomic update

        A failed append leaves the blob unreferenced; it is logged and the
        error re-raised without rollback.

        Returns:
            The new image reference and the updated section

        Raises:
            ValidationError: If the file is not an allowed image or too large
            NotFoundError: If the section does not exist
            UpstreamStoreError: If a store call fails
        """
        if content_type not in ALLOWED_MIME_TYPES:
            logger.warning(
                "Unsupported MIME type",
                extra={"section_id": section_id, "mime_type": content_type},
            )
            raise MIMETypeError(
                message="Only image files are allowed",
                details={"mime_type": content_type},
            )

        if len(file_data) > MAX_FILE_SIZE:
            raise FileSizeError(
                message=f"File size exceeds {get_max_file_size_mb()}MB limit",
                details={"size": len(file_data)},
            )

        self._require_section(section_id)

        blob = self._store_call(
            "upload image",
            lambda: self.blobs.put(
                section_id=section_id,
                file_data=file_data,
                content_type=content_type,
                file_name=file_name,
            ),
            section_id=section_id,
        )

        image = Image(id=blob.token, url=blob.url)

        try:
            section = self._store_call(
                "add image to section",
                lambda: self.sections.append_image(section_id=section_id, image=image),
                section_id=section_id,
                image_id=image.id,
            )
        except GalleryServiceError:
            logger.error(
                "Image stored but not referenced by section",
                extra={"section_id": section_id, "orphaned_key": blob.key},
            )
            raise

        logger.info(
            "Image uploaded",
            extra={"section_id": section_id, "image_id": image.id},
        )
        return image, section

    def delete_section(self, section_id: str) -> int:
        """Purge every blob of a section, then delete its record.

        Returns:
            Number of purged blobs

        Raises:
            NotFoundError: If the section does not exist
            UpstreamStoreError: If a store call fails
        """
        self._require_section(section_id)

        purged = self._store_call(
            "delete section images",
            lambda: self.blobs.delete_prefix(section_id=section_id),
            section_id=section_id,
        )

        try:
            self._store_call(
                "delete section",
                lambda: self.sections.delete_section(section_id=section_id),
                section_id=section_id,
            )
        except GalleryServiceError:
            logger.error(
                "Section images purged but record not deleted",
                extra={"section_id": section_id, "purged": purged},
            )
            raise

        logger.info(
            "Section deleted",
            extra={"section_id": section_id, "purged": purged},
        )
        return purged

    def delete_image(self, section_id: str, image_id: str) -> Section:
        """Delete an image blob, then remove its reference from the section.

        The list position is resolved again right before the removal since
        the list may have changed while the blob was being deleted.

        Returns:
            The updated section

        Raises:
            NotFoundError: If the section or image does not exist
            UpstreamStoreError: If a store call fails
        """
        section = self._require_section(section_id)
        image = section.find_image(image_id)

        if image is None:
            logger.warning(
                "Image not found in section",
                extra={"section_id": section_id, "image_id": image_id},
            )
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"section_id": section_id, "image_id": image_id},
            )

        self._store_call(
            "delete image",
            lambda: self.blobs.delete(url=image.url),
            section_id=section_id,
            image_id=image_id,
        )

        current = self._require_section(section_id)
        index = current.index_of(image_id)

        if index is None:
            logger.warning(
                "Image reference removed concurrently",
                extra={"section_id": section_id, "image_id": image_id},
            )
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"section_id": section_id, "image_id": image_id},
            )

        updated = self._store_call(
            "remove image from section",
            lambda: self.sections.remove_image_at(section_id=section_id, index=index),
            section_id=section_id,
            image_id=image_id,
        )

        logger.info(
            "Image deleted",
            extra={"section_id": section_id, "image_id": image_id},
        )
        return updated

    def reconcile_section(self, section_id: str, *, dry_run: bool = False) -> ReconcileReport:
        """Compare stored blobs with the section's references.

        Blobs under the section prefix that no image references are deleted
        unless ``dry_run`` is set. References whose blob is missing are only
        reported. An upload in flight between its blob write and its append
        looks orphaned, so run this while the section is idle.

        Raises:
            NotFoundError: If the section does not exist
            UpstreamStoreError: If a store call fails
        """
        section = self._require_section(section_id)
        stored_keys = set(
            self._store_call(
                "list section images",
                lambda: self.blobs.list_keys(section_id=section_id),
                section_id=section_id,
            )
        )

        referenced_keys: set[str] = set()
        for image in section.images:
            try:
                referenced_keys.add(self.blobs.key_from_url(image.url))
            except BlobStoreError:
                logger.warning(
                    "Skipping image with foreign URL",
                    extra={"section_id": section_id, "image_id": image.id},
                )

        report = ReconcileReport(
            section_id=section_id,
            orphaned_keys=sorted(stored_keys - referenced_keys),
            missing_keys=sorted(referenced_keys - stored_keys),
        )

        if report.orphaned_keys and not dry_run:
            for key in report.orphaned_keys:
                self._store_call(
                    "delete orphaned image",
                    lambda key=key: self.blobs.delete(url=self.blobs.url_for_key(key)),
                    section_id=section_id,
                    key=key,
                )
            report.removed = True

        logger.info(
            "Section reconciled",
            extra={
                "section_id": section_id,
                "orphaned": len(report.orphaned_keys),
                "missing": len(report.missing_keys),
                "dry_run": dry_run,
            },
        )
        return report


@lru_cache(maxsize=1)
def get_gallery_service() -> GalleryService:
    """Return the process-wide service, built on first use."""
    return GalleryService()
