"""Section identifier derivation."""

import re

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")
_HYPHEN_RUN = re.compile(r"-+")


def derive_section_id(name: str) -> str:
    """Derive a stable section id from a display name.

    Lowercases the name, replaces every character outside ``[a-z0-9]`` with a
    hyphen, collapses hyphen runs and trims hyphens from both ends.

    Example:
        "Summer Trip!" -> "summer-trip"
        "Summer  Trip" -> "summer-trip"

    Returns an empty string when the name has no usable characters.
    """
    slug = _NON_ALPHANUMERIC.sub("-", name.lower())
    slug = _HYPHEN_RUN.sub("-", slug)
    return slug.strip("-")
