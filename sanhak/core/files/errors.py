"""
Error kinds raised by file storage operations.

Every error carries a stable ``code`` so upstream handlers can map it to a
response without matching on message text. Validation errors mean the
client sent something we refuse to store; IO errors mean the object store
(or reading the upload) failed.
"""

from typing import Optional


class FileStorageError(Exception):
    """Base class for all file storage failures."""

    code: str = "FILE_STORAGE_ERROR"
    default_message: str = "File storage operation failed"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class FileValidationError(FileStorageError):
    """The submitted file is not acceptable."""

    code = "INVALID_FILE"
    default_message = "File is not acceptable"


class EmptyFileError(FileValidationError):
    code = "EMPTY_FILE"
    default_message = "File is empty or has no name"


class MissingExtensionError(FileValidationError):
    code = "NO_FILE_EXTENSION"
    default_message = "File name has no extension"


class InvalidExtensionError(FileValidationError):
    code = "INVALID_FILE_EXTENSION"
    default_message = "File extension is not allowed"


class FileTooLargeError(FileValidationError):
    code = "FILE_TOO_LARGE"
    default_message = "File exceeds the maximum upload size"


class InvalidURLError(FileStorageError):
    """A file URL could not be turned into a storage key."""

    code = "INVALID_FILE_URL"
    default_message = "File URL is malformed"


class UploadIOError(FileStorageError):
    code = "IO_EXCEPTION_ON_FILE_UPLOAD"
    default_message = "Failed to upload file"


class DeleteIOError(FileStorageError):
    code = "IO_EXCEPTION_ON_FILE_DELETE"
    default_message = "Failed to delete file"


class DownloadIOError(FileStorageError):
    code = "IO_EXCEPTION_ON_FILE_DOWNLOAD"
    default_message = "Failed to download file"
