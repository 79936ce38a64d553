"""MIME type normalization for uploaded recordings."""

import os

DEFAULT_MIME_TYPE = "audio/mp4"

_EXTENSION_OVERRIDES = {
    ".m4a": "audio/mp4",
    ".mp3": "audio/mp3",
}


def normalize_mime_type(file_name: str | None, declared: str | None) -> str:
    """
    Picks the MIME type to send with an uploaded file.

    Browsers report ``.m4a`` and ``.mp3`` inconsistently, so those two
    extensions are pinned. Anything else keeps its declared type, falling
    back to ``audio/mp4`` when none was given.
    """
    extension = os.path.splitext(file_name or "")[1].lower()
    if extension in _EXTENSION_OVERRIDES:
        return _EXTENSION_OVERRIDES[extension]
    return declared or DEFAULT_MIME_TYPE
