"""
Stored file rules: models, error kinds, and key/URL derivation.
"""

from .errors import (
    DeleteIOError,
    DownloadIOError,
    EmptyFileError,
    FileStorageError,
    FileTooLargeError,
    FileValidationError,
    InvalidExtensionError,
    InvalidURLError,
    MissingExtensionError,
    UploadIOError,
)
from .keys import (
    generate_object_key,
    object_key_from_url,
    object_url,
    validate_extension,
)
from .models import DownloadedFile, StoredObjectExtension, UploadRequest

__all__ = [
    "DeleteIOError",
    "DownloadIOError",
    "DownloadedFile",
    "EmptyFileError",
    "FileStorageError",
    "FileTooLargeError",
    "FileValidationError",
    "InvalidExtensionError",
    "InvalidURLError",
    "MissingExtensionError",
    "StoredObjectExtension",
    "UploadIOError",
    "UploadRequest",
    "generate_object_key",
    "object_key_from_url",
    "object_url",
    "validate_extension",
]
