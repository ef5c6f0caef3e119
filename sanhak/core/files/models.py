"""
Domain models for stored files.

These models have no dependencies on the storage SDK or the web framework.
An upload is just a name and some bytes; a download is the same plus the
content type the store reported.
"""

import io
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StoredObjectExtension(Enum):
    """File extensions we accept for upload."""
    JPG = "jpg"
    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    PDF = "pdf"

    @classmethod
    def from_value(cls, value: str) -> Optional["StoredObjectExtension"]:
        """Case-insensitive lookup. Returns None for unknown extensions."""
        try:
            return cls(value.lower())
        except ValueError:
            return None

    @property
    def content_type(self) -> str:
        """MIME type stored with the object."""
        if self is StoredObjectExtension.PDF:
            return "application/pdf"
        return f"image/{self.value}"


@dataclass(frozen=True)
class UploadRequest:
    """
    A file submitted for upload.

    Content is held in memory; every call to open() yields an
    independent stream so the request can be read more than once.
    """
    filename: Optional[str]
    content: bytes = b""

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def is_empty(self) -> bool:
        return not self.content

    def open(self) -> io.BytesIO:
        return io.BytesIO(self.content)


@dataclass(frozen=True)
class DownloadedFile:
    """
    A file fetched from object storage.

    Request-scoped: the caller uses it and drops it. Both name fields
    hold the storage key because the store doesn't keep the original
    client-side filename separately.
    """
    name: str
    original_filename: str
    content_type: Optional[str]
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    def open(self) -> io.BytesIO:
        return io.BytesIO(self.content)

    def to_upload_request(self) -> UploadRequest:
        """Re-wrap the download so it can be uploaded again."""
        return UploadRequest(filename=self.original_filename, content=self.content)
