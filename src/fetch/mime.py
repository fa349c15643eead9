"""MIME type lookup for multipart uploads."""

import mimetypes
from collections.abc import Callable
from urllib.parse import urlparse

from src.fetch.constants import CONTENT_TYPE_FALLBACK


MimeLookup = Callable[[str], str | None]
"""Return a best-guess content type for a path or filename, or None."""


def guess_content_type(path: str) -> str | None:
    """Guess a content type from a file path or filename.

    Args:
        path: Path or filename; only the extension is used.

    Returns:
        Content type, or None if the extension is unknown.
    """
    content_type, _ = mimetypes.guess_type(path, strict=False)
    return content_type


def url_lookup_path(url: str) -> str:
    """Return the path component of a URL for extension-based lookup.

    Query strings and fragments would otherwise hide the extension.
    """
    return urlparse(url).path


def resolve_content_type(lookup: MimeLookup, path: str) -> str:
    """Run a MIME lookup, falling back to application/octet-stream.

    Exceptions raised by the lookup propagate to the caller.
    """
    return lookup(path) or CONTENT_TYPE_FALLBACK
