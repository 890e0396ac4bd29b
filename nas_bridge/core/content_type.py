"""Filename to MIME type resolution for upload headers."""

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES: dict[str, str] = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "json": "application/json",
    "txt": "text/plain",
}


def file_extension(filename: str) -> str:
    """
    Lowercased text after the last dot, or "" when there is none.

    Example:
        >>> file_extension("Logo.PNG")
        'png'
    """
    _, dot, ext = filename.rpartition(".")
    return ext.lower() if dot else ""


def resolve_content_type(filename: str) -> str:
    """Return the MIME type for a filename, falling back to octet-stream."""
    return CONTENT_TYPES.get(file_extension(filename), DEFAULT_CONTENT_TYPE)
