"""
Object storage integration for uploaded files.

Talks to S3 via boto3. Includes mock mode for local development
without credentials.
"""

from .client import (
    FileStorage,
    InMemoryS3Client,
    S3FileStorage,
    StorageConfig,
    create_file_storage,
    create_s3_client,
)

__all__ = [
    "FileStorage",
    "InMemoryS3Client",
    "S3FileStorage",
    "StorageConfig",
    "create_file_storage",
    "create_s3_client",
]
