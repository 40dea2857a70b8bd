"""Abstract contract for image blob storage."""

from abc import ABC, abstractmethod

from core.models.section import StoredBlob


class BlobRepository(ABC):
    """Contract for storing and removing image files.

    Keys are partitioned by section: ``<section_id>/<token>.<ext>``.
    Implementations could be S3, GCS, local disk, etc.
    """

    @abstractmethod
    def put(
        self,
        *,
        section_id: str,
        file_data: bytes,
        content_type: str,
        file_name: str,
    ) -> StoredBlob:
        """Store image bytes under a fresh key inside the section prefix.

        Returns:
            The generated token, the object key and its public URL

        Raises:
            BlobStoreError: If the upload fails
        """

    @abstractmethod
    def delete(self, *, url: str) -> None:
        """Delete the object behind a public URL. Absent objects are not an error.

        Raises:
            BlobStoreError: If the URL cannot be resolved or deletion fails
        """

    @abstractmethod
    def delete_prefix(self, *, section_id: str) -> int:
        """Delete every object under the section prefix.

        Returns:
            Number of deleted objects (0 for an empty prefix)

        Raises:
            BlobStoreError: If listing or deletion fails
        """

    @abstractmethod
    def list_keys(self, *, section_id: str) -> list[str]:
        """List every object key under the section prefix.

        Raises:
            BlobStoreError: If listing fails
        """

    @abstractmethod
    def url_for_key(self, key: str) -> str:
        """Build the public retrieval URL for an object key."""

    @abstractmethod
    def key_from_url(self, url: str) -> str:
        """Resolve a public URL back to its object key.

        Raises:
            BlobStoreError: If the URL does not belong to this store
        """
