"""Abstract contract for section record persistence."""

from abc import ABC, abstractmethod

from core.models.section import Image, Section


class SectionRepository(ABC):
    """Contract for storing and mutating section records.

    Implementations could be DynamoDB, MongoDB, an in-memory fake, etc.
    The gallery service depends on this interface, not the implementation.
    """

    @abstractmethod
    def list_sections(self) -> list[Section]:
        """Return every section (unordered).

        Raises:
            DocumentStoreError: If the scan fails
        """

    @abstractmethod
    def get_section(self, *, section_id: str) -> Section | None:
        """Fetch one section.

        Returns:
            The section, or None when no record exists

        Raises:
            DocumentStoreError: If the lookup fails
        """

    @abstractmethod
    def create_section(self, *, section_id: str, name: str) -> Section:
        """Create an empty section record.

        Uniqueness is checked by the caller beforehand.

        Raises:
            AlreadyExistsError: If a record appeared concurrently
            DocumentStoreError: If the write fails
        """

    @abstractmethod
    def append_image(self, *, section_id: str, image: Image) -> Section:
        """Atomically append one image reference.

        Raises:
            NotFoundError: If the section record does not exist
            DocumentStoreError: If the update fails
        """

    @abstractmethod
    def remove_image_at(self, *, section_id: str, index: int) -> Section:
        """Atomically remove the image reference at ``index``.

        The index must be resolved from a lookup made immediately before
        this call; removal is positional.

        Raises:
            NotFoundError: If the section record does not exist
            DocumentStoreError: If the update fails
        """

    @abstractmethod
    def delete_section(self, *, section_id: str) -> None:
        """Delete a section record. Deleting an absent record succeeds.

        Raises:
            DocumentStoreError: If the delete fails
        """
