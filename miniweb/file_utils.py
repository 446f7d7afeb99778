"""File reading and content-type lookup for served files."""

from __future__ import annotations

_DEFAULT_TYPE = "application/octet-stream"

_CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".htm": "text/html; charset=utf-8",
    ".css": "text/css",
    ".js": "application/javascript",
    ".json": "application/json",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".txt": "text/plain; charset=utf-8",
}


def read_file(filename: str) -> bytes:
    """Return the whole content of ``filename``; raises ``OSError`` on failure."""
    with open(filename, "rb") as handle:
        return handle.read()


def get_content_type(path: str) -> str:
    """Return the MIME type for ``path`` judged by the text after its last dot."""
    dot = path.rfind(".")
    if dot < 0:
        return _DEFAULT_TYPE
    return _CONTENT_TYPES.get(path[dot:], _DEFAULT_TYPE)