import mimetypes
from pathlib import PurePath

DEFAULT_FILE_TYPE = "application/octet-stream"

_KNOWN_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".json": "application/json",
    ".jpg": "image/jpeg",
    ".png": "image/png",
}


def file_type_for(file_name: str) -> str:
    """Best-effort MIME type for *file_name*, recorded alongside the document."""
    suffix = PurePath(file_name).suffix.lower()
    if suffix in _KNOWN_TYPES:
        return _KNOWN_TYPES[suffix]
    guessed, _ = mimetypes.guess_type(file_name)
    return guessed or DEFAULT_FILE_TYPE
