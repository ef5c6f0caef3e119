"""
FastAPI dependency injection.

Request handlers that accept or serve files get their storage through
these dependencies rather than building clients themselves. Using
dependency injection means:
- Handlers can be tested with app.dependency_overrides
- Mock vs real storage is decided in one place
- Configuration is centralized
"""

import logging
from typing import Annotated

from fastapi import Depends, UploadFile

from ..config.settings import Settings, get_settings
from ..core.files import FileTooLargeError, UploadIOError, UploadRequest
from ..infrastructure.storage.client import FileStorage, create_file_storage

logger = logging.getLogger(__name__)

# Global mock instance (shared across requests for testing)
_mock_file_storage = None


def get_file_storage(
    settings: Annotated[Settings, Depends(get_settings)],
) -> FileStorage:
    """
    Provide file storage for uploads, deletes and downloads.

    In mock mode, we reuse the same storage across requests
    so that uploaded files persist during the testing session.
    """
    global _mock_file_storage

    if settings.s3_mock_mode:
        if _mock_file_storage is None:
            _mock_file_storage = create_file_storage(
                config=settings.storage_config(),
                mock_mode=True,
            )
            logger.info("Created shared mock file storage for session")
        return _mock_file_storage

    storage = create_file_storage(config=settings.storage_config())
    logger.debug("Created S3 file storage")
    return storage


def reset_file_storage() -> None:
    """Drop the shared mock storage. For tests."""
    global _mock_file_storage
    _mock_file_storage = None


def read_upload(upload_file: UploadFile, settings: Settings) -> UploadRequest:
    """
    Read a multipart upload into an UploadRequest.

    The upload's stream is closed once read. Files over the configured
    size limit are rejected before anything reaches storage.
    """
    try:
        with upload_file.file as source:
            content = source.read(settings.max_upload_size_bytes + 1)
    except OSError as e:
        raise UploadIOError(f"Could not read upload: {e}") from e

    if len(content) > settings.max_upload_size_bytes:
        logger.warning(
            "Rejected oversized upload",
            extra={
                "upload_filename": upload_file.filename,
                "max_mb": settings.max_upload_size_mb,
            }
        )
        raise FileTooLargeError(
            f"File exceeds the {settings.max_upload_size_mb} MB upload limit"
        )

    return UploadRequest(filename=upload_file.filename, content=content)


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

FileStorageDep = Annotated[FileStorage, Depends(get_file_storage)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
