"""
Rules relating filenames, storage keys and public URLs.

All functions here are pure. Delete and download both go through
object_key_from_url so the two can never disagree about URL shape.
"""

from typing import Optional
from urllib.parse import quote, unquote_plus, urlsplit
from uuid import uuid4

from .errors import InvalidExtensionError, InvalidURLError, MissingExtensionError
from .models import StoredObjectExtension

KEY_PREFIX_LENGTH = 10

_URL_SCHEMES = ("http", "https")


def validate_extension(filename: str) -> StoredObjectExtension:
    """
    Return the allowed extension of a filename.

    The extension is whatever follows the last dot, compared
    case-insensitively. Raises MissingExtensionError when there is no
    dot and InvalidExtensionError when the extension isn't allowed.
    """
    _, dot, extension = filename.rpartition(".")
    if not dot:
        raise MissingExtensionError(f"File name has no extension: {filename!r}")

    allowed = StoredObjectExtension.from_value(extension)
    if allowed is None:
        raise InvalidExtensionError(
            f"Extension {extension!r} is not allowed; "
            f"expected one of {', '.join(e.value for e in StoredObjectExtension)}"
        )
    return allowed


def generate_object_key(filename: str, prefix: Optional[str] = None) -> str:
    """
    Build a storage key: a short random prefix followed by the filename.

    The prefix is the first 10 hex digits of a UUID4, so two uploads of
    the same filename are very unlikely (but not guaranteed) to collide.
    """
    if prefix is None:
        prefix = uuid4().hex[:KEY_PREFIX_LENGTH]
    return f"{prefix}{filename}"


def object_url(base_url: str, key: str) -> str:
    """Public URL of a key under base_url, with the key percent-encoded."""
    return f"{base_url.rstrip('/')}/{quote(key, safe='/')}"


def object_key_from_url(url: str) -> str:
    """
    Derive the storage key from an object's public URL.

    Takes the URL path, percent-decodes it and drops the leading '/'.
    '+' decodes to a space, as in URLs copied from the S3 console;
    object_url writes a literal '+' as %2B so its URLs still round-trip.
    """
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidURLError(f"Malformed file URL {url!r}: {e}") from e

    if parts.scheme not in _URL_SCHEMES or not parts.netloc:
        raise InvalidURLError(f"Not an absolute http(s) URL: {url!r}")

    key = unquote_plus(parts.path)[1:]
    if not key:
        raise InvalidURLError(f"File URL has no object path: {url!r}")
    return key
