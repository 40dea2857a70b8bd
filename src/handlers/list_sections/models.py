"""Pydantic models for the public section listing."""

from pydantic import RootModel

from core.models.section import Section


class ListSectionsResponse(RootModel[list[Section]]):
    """Every section with its images, serialized with record field names."""
