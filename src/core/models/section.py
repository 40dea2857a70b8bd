"""Shared section and image models.

Field aliases mirror the persisted DynamoDB record shape, which is also the
shape returned by the API.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class Image(BaseModel):
    """Reference to one stored image inside a section."""

    model_config = ConfigDict(frozen=True)

    id: StrictStr = Field(..., description="Unique image identifier")
    url: StrictStr = Field(..., description="Public retrieval URL")


class Section(BaseModel):
    """A named, ordered collection of image references."""

    model_config = ConfigDict(populate_by_name=True)

    section_id: StrictStr = Field(..., alias="sectionId", description="Slug derived from the name")
    name: StrictStr = Field(..., description="Display name")
    images: list[Image] = Field(default_factory=list, description="Images in insertion order")
    created_at: StrictStr = Field(..., alias="createdAt", description="ISO-8601 creation timestamp (UTC)")
    updated_at: StrictStr = Field(..., alias="updatedAt", description="ISO-8601 last update timestamp (UTC)")

    def find_image(self, image_id: str) -> Image | None:
        index = self.index_of(image_id)
        return None if index is None else self.images[index]

    def index_of(self, image_id: str) -> int | None:
        """Return the current list position of ``image_id`` or None."""
        for index, image in enumerate(self.images):
            if image.id == image_id:
                return index
        return None

    def to_record(self) -> dict[str, Any]:
        """Serialize using the persisted (camelCase) attribute names."""
        return self.model_dump(by_alias=True)


class StoredBlob(BaseModel):
    """Result of writing one image object to the blob store."""

    token: StrictStr = Field(..., description="Unique token used for the key and the image id")
    key: StrictStr = Field(..., description="Object key inside the bucket")
    url: StrictStr = Field(..., description="Public retrieval URL")


class ReconcileReport(BaseModel):
    """Outcome of comparing a section record against its stored blobs."""

    section_id: StrictStr
    orphaned_keys: list[StrictStr] = Field(
        default_factory=list,
        description="Blobs under the section prefix that no image references",
    )
    missing_keys: list[StrictStr] = Field(
        default_factory=list,
        description="Referenced blobs that no longer exist",
    )
    removed: bool = Field(False, description="Whether orphaned blobs were deleted")
