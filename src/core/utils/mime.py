"""Content type detection from file signatures."""

from collections.abc import Mapping

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
}

# RIFF containers carry the format tag at bytes 8-12.
_RIFF_SIGNATURE = b"RIFF"
_WEBP_TAG = b"WEBP"


def detect_mime_type(file_data: bytes) -> str:
    if file_data.startswith(_RIFF_SIGNATURE) and file_data[8:12] == _WEBP_TAG:
        return "image/webp"

    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    raise ValueError("Unsupported or unknown file type")
