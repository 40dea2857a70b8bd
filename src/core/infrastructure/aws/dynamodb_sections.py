"""DynamoDB-backed implementation of SectionRepository."""

from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import (
    AlreadyExistsError,
    DocumentStoreError,
    GalleryServiceError,
    NotFoundError,
    ValidationError,
)
from core.models.section import Image, Section
from core.repositories.section_repository import SectionRepository
from core.utils.constants import (
    ERROR_CODE_SECTION_CREATE_FAILED,
    ERROR_CODE_SECTION_DELETE_FAILED,
    ERROR_CODE_SECTION_FETCH_FAILED,
    ERROR_CODE_SECTION_INVALID_FORMAT,
    ERROR_CODE_SECTION_LIST_FAILED,
    ERROR_CODE_SECTION_NOT_FOUND,
    ERROR_CODE_SECTION_UPDATE_FAILED,
    SECTION_TABLE_PARTITION_KEY,
)
from core.utils.time import utc_now_iso

Item = dict[str, Any]

logger = Logger(utc=True)

_RECORD_EXISTS = f"attribute_exists({SECTION_TABLE_PARTITION_KEY})"
_RECORD_ABSENT = f"attribute_not_exists({SECTION_TABLE_PARTITION_KEY})"


def _is_conditional_failure(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"


class DynamoDBSections(SectionRepository):
    """DynamoDB-backed section storage with error handling.

    All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol | None = None) -> None:
        """Initialize with DynamoDB adapter."""
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter()

    @staticmethod
    def _key(section_id: str) -> Item:
        return {SECTION_TABLE_PARTITION_KEY: section_id}

    @staticmethod
    def _to_section(item: Any, *, section_id: str | None = None) -> Section:
        """Validate a raw DynamoDB item into a Section."""
        try:
            return Section.model_validate(item)
        except PydanticValidationError as exc:
            logger.error(
                "Invalid section record format",
                extra={"section_id": section_id, "errors": exc.errors()},
            )
            raise DocumentStoreError(
                message="Invalid section record format",
                error_code=ERROR_CODE_SECTION_INVALID_FORMAT,
                details={"section_id": section_id},
            ) from exc

    def list_sections(self) -> list[Section]:
        """Scan every section record.

        Malformed records are skipped with a warning so one bad item does not
        take the public listing down.

        Raises:
            DocumentStoreError: If the scan fails
        """
        logger.debug("Listing sections")

        sections: list[Section] = []
        scan_kwargs: dict[str, Any] = {}

        try:
            while True:
                response = self._db.scan(**scan_kwargs)
                page_items = response.get("Items", [])

                if not isinstance(page_items, list):
                    raise DocumentStoreError(
                        message="Invalid scan response from DynamoDB",
                        error_code=ERROR_CODE_SECTION_LIST_FAILED,
                    )

                for item in page_items:
                    try:
                        sections.append(self._to_section(item))
                    except DocumentStoreError:
                        logger.warning(
                            "Skipping malformed section record",
                            extra={"section_id": item.get(SECTION_TABLE_PARTITION_KEY)},
                        )

                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_evaluated_key

        except GalleryServiceError:
            raise

        except ClientError as exc:
            logger.error("DynamoDB scan failed")
            raise DocumentStoreError(
                message="Unable to list gallery sections",
                error_code=ERROR_CODE_SECTION_LIST_FAILED,
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error listing sections")
            raise DocumentStoreError(
                message="Unable to list gallery sections",
                error_code=ERROR_CODE_SECTION_LIST_FAILED,
            ) from exc

        logger.info("Sections listed", extra={"count": len(sections)})
        return sections

    def get_section(self, *, section_id: str) -> Section | None:
        """Fetch a single section.

        Raises:
            DocumentStoreError: If fetch fails
        """
        logger.debug("Fetching section", extra={"section_id": section_id})

        try:
            response = self._db.get_item(key=self._key(section_id))
            item = response.get("Item")

            if item is None:
                return None

            return self._to_section(item, section_id=section_id)

        except GalleryServiceError:
            raise

        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"section_id": section_id})
            raise DocumentStoreError(
                message="Unable to retrieve section",
                error_code=ERROR_CODE_SECTION_FETCH_FAILED,
                details={"section_id": section_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error fetching section")
            raise DocumentStoreError(
                message="Unable to retrieve section",
                error_code=ERROR_CODE_SECTION_FETCH_FAILED,
                details={"section_id": section_id},
            ) from exc

    def create_section(self, *, section_id: str, name: str) -> Section:
        """Create an empty section record.

        The put is conditional on the key being absent, so a creator that
        loses a race gets AlreadyExistsError instead of overwriting.

        Raises:
            AlreadyExistsError: If the record already exists
            DocumentStoreError: If creation fails
        """
        timestamp = utc_now_iso()
        section = Section(
            section_id=section_id,
            name=name,
            images=[],
            created_at=timestamp,
            updated_at=timestamp,
        )

        logger.debug("Creating section", extra={"section_id": section_id})

        try:
            self._db.put_item(
                item=section.to_record(),
                condition_expression=_RECORD_ABSENT,
            )
            logger.info("Section created", extra={"section_id": section_id})
            return section

        except ClientError as exc:
            if _is_conditional_failure(exc):
                logger.warning(
                    "Section created concurrently",
                    extra={"section_id": section_id},
                )
                raise AlreadyExistsError(
                    message="Section already exists",
                    details={"section_id": section_id},
                ) from exc

            logger.error("DynamoDB put_item failed", extra={"section_id": section_id})
            raise DocumentStoreError(
                message="Unable to create section at this time",
                error_code=ERROR_CODE_SECTION_CREATE_FAILED,
                details={"section_id": section_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error creating section")
            raise DocumentStoreError(
                message="Unable to create section at this time",
                error_code=ERROR_CODE_SECTION_CREATE_FAILED,
                details={"section_id": section_id},
            ) from exc

    def append_image(self, *, section_id: str, image: Image) -> Section:
        """Append one image reference in a single atomic update.

        Raises:
            NotFoundError: If the section does not exist
            DocumentStoreError: If the update fails
        """
        logger.debug(
            "Appending image to section",
            extra={"section_id": section_id, "image_id": image.id},
        )

        return self._update(
            section_id=section_id,
            update_expression=(
                "SET images = list_append(if_not_exists(images, :empty_list), :new_image), "
                "updatedAt = :timestamp"
            ),
            expression_attribute_values={
                ":new_image": [image.model_dump()],
                ":empty_list": [],
                ":timestamp": utc_now_iso(),
            },
            log_context={"image_id": image.id},
        )

    def remove_image_at(self, *, section_id: str, index: int) -> Section:
        """Remove the image reference at a list position.

        Raises:
            ValidationError: If the index is negative
            NotFoundError: If the section does not exist
            DocumentStoreError: If the update fails
        """
        if index < 0:
            raise ValidationError(
                message="Image index must not be negative",
                details={"index": index},
            )

        logger.debug(
            "Removing image from section",
            extra={"section_id": section_id, "index": index},
        )

        return self._update(
            section_id=section_id,
            update_expression=f"REMOVE images[{index}] SET updatedAt = :timestamp",
            expression_attribute_values={":timestamp": utc_now_iso()},
            log_context={"index": index},
        )

    def delete_section(self, *, section_id: str) -> None:
        """Remove a section record.

        Raises:
            DocumentStoreError: If deletion fails
        """
        logger.debug("Deleting section record", extra={"section_id": section_id})

        try:
            self._db.delete_item(key=self._key(section_id))
            logger.info("Section record deleted", extra={"section_id": section_id})

        except ClientError as exc:
            logger.error("DynamoDB delete_item failed", extra={"section_id": section_id})
            raise DocumentStoreError(
                message="Unable to delete section",
                error_code=ERROR_CODE_SECTION_DELETE_FAILED,
                details={"section_id": section_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting section")
            raise DocumentStoreError(
                message="Unable to delete section",
                error_code=ERROR_CODE_SECTION_DELETE_FAILED,
                details={"section_id": section_id},
            ) from exc

    def _update(
        self,
        *,
        section_id: str,
        update_expression: str,
        expression_attribute_values: Item,
        log_context: Item,
    ) -> Section:
        """Run a conditional single-item update on an existing section."""
        try:
            response = self._db.update_item(
                key=self._key(section_id),
                update_expression=update_expression,
                expression_attribute_values=expression_attribute_values,
                condition_expression=_RECORD_EXISTS,
            )
            section = self._to_section(response.get("Attributes"), section_id=section_id)
            logger.info(
                "Section updated",
                extra={"section_id": section_id, "image_count": len(section.images), **log_context},
            )
            return section

        except GalleryServiceError:
            raise

        except ClientError as exc:
            if _is_conditional_failure(exc):
                logger.warning(
                    "Section missing during update",
                    extra={"section_id": section_id, **log_context},
                )
                raise NotFoundError(
                    message="Section not found",
                    error_code=ERROR_CODE_SECTION_NOT_FOUND,
                    details={"section_id": section_id},
                ) from exc

            logger.error(
                "DynamoDB update_item failed",
                extra={"section_id": section_id, **log_context},
            )
            raise DocumentStoreError(
                message="Unable to update section",
                error_code=ERROR_CODE_SECTION_UPDATE_FAILED,
                details={"section_id": section_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error updating section")
            raise DocumentStoreError(
                message="Unable to update section",
                error_code=ERROR_CODE_SECTION_UPDATE_FAILED,
                details={"section_id": section_id},
            ) from exc
