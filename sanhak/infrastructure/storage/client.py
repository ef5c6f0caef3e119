"""
Object storage client for uploaded images and PDFs.

Files live in a single S3 bucket and are served publicly by URL. The URL
handed back on upload is the only handle callers keep, so delete and
download both start from a URL and work back to the key.

Mock mode swaps the boto3 client for an in-memory one with the same call
shape, enabling local development and tests without a bucket.
"""

import hashlib
import io
import logging
from contextlib import closing
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ...core.files import (
    DeleteIOError,
    DownloadedFile,
    DownloadIOError,
    EmptyFileError,
    FileValidationError,
    InvalidURLError,
    UploadIOError,
    UploadRequest,
    generate_object_key,
    object_key_from_url,
    object_url,
    validate_extension,
)

logger = logging.getLogger(__name__)

PUBLIC_READ_ACL = "public-read"
DEFAULT_REGION = "ap-northeast-2"


def default_object_base_url(bucket_name: str, region: str = DEFAULT_REGION) -> str:
    """Virtual-hosted URL of a bucket, used when no public base URL is set."""
    return f"https://{bucket_name}.s3.{region}.amazonaws.com"


@dataclass
class StorageConfig:
    """
    Configuration for S3 storage.

    Read once at startup and passed in explicitly, so nothing in the
    storage layer reaches for global settings.
    """
    access_key_id: str
    secret_access_key: str
    bucket_name: str
    region: str = DEFAULT_REGION
    endpoint_url: Optional[str] = None
    public_base_url: Optional[str] = None

    @property
    def object_base_url(self) -> str:
        """Base URL public objects are addressed under."""
        if self.public_base_url:
            return self.public_base_url.rstrip("/")
        return default_object_base_url(self.bucket_name, self.region)


class FileStorage(Protocol):
    """
    Protocol for file storage operations.

    Upstream handlers depend on this rather than on S3FileStorage so
    tests can substitute their own implementation.
    """

    def upload(self, file: UploadRequest) -> str:
        """Validate and store a file. Returns its public URL."""
        ...

    def delete_by_url(self, url: str) -> None:
        """Delete the object a public URL points at."""
        ...

    def download_by_url(self, url: str) -> DownloadedFile:
        """Fetch the object a public URL points at."""
        ...


class S3FileStorage:
    """
    S3-backed file storage.

    The boto3 client and bucket are injected. Each call is independent
    and holds no state between calls, so one instance can be shared by
    concurrent requests.
    """

    def __init__(
        self,
        s3_client: Any,
        bucket_name: str,
        public_base_url: Optional[str] = None,
    ) -> None:
        self._s3_client = s3_client
        self._bucket_name = bucket_name
        self._public_base_url = (
            public_base_url or default_object_base_url(bucket_name)
        ).rstrip("/")

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    def upload(self, file: UploadRequest) -> str:
        """
        Upload a file and return its public URL.

        Only non-empty jpg, jpeg, png, gif and pdf files are accepted.
        The object is written public-read under a randomly prefixed key.
        """
        if file.is_empty or not file.filename:
            logger.warning("Rejected empty upload", extra={"upload_filename": file.filename})
            raise EmptyFileError()

        try:
            extension = validate_extension(file.filename)
        except FileValidationError as e:
            logger.warning(
                "Rejected upload",
                extra={"upload_filename": file.filename, "error": e.code},
            )
            raise

        key = generate_object_key(file.filename)

        try:
            with file.open() as buffer:
                self._s3_client.put_object(
                    Bucket=self._bucket_name,
                    Key=key,
                    Body=buffer,
                    ContentType=extension.content_type,
                    ContentLength=file.size,
                    ACL=PUBLIC_READ_ACL,
                )
        except Exception as e:
            logger.error(
                "Failed to upload file",
                extra={"bucket": self._bucket_name, "key": key, "error": str(e)}
            )
            raise UploadIOError(f"Upload failed: {e}") from e

        logger.info(
            "Uploaded file",
            extra={
                "bucket": self._bucket_name,
                "key": key,
                "content_type": extension.content_type,
                "size_bytes": file.size,
            }
        )

        return object_url(self._public_base_url, key)

    def delete_by_url(self, url: str) -> None:
        """Delete the object behind a URL previously returned by upload()."""
        try:
            key = object_key_from_url(url)
        except InvalidURLError as e:
            raise DeleteIOError(f"Delete failed: {e}") from e

        try:
            self._s3_client.delete_object(Bucket=self._bucket_name, Key=key)
        except Exception as e:
            logger.error(
                "Failed to delete file",
                extra={"bucket": self._bucket_name, "key": key, "error": str(e)}
            )
            raise DeleteIOError(f"Delete failed: {e}") from e

        logger.info("Deleted file", extra={"bucket": self._bucket_name, "key": key})

    def download_by_url(self, url: str) -> DownloadedFile:
        """
        Download the object behind a URL into memory.

        The response body is read fully and closed before returning, so
        the caller never holds an open connection.
        """
        try:
            key = object_key_from_url(url)
            response = self._s3_client.get_object(Bucket=self._bucket_name, Key=key)
            with closing(response["Body"]) as body:
                content = body.read()
        except Exception as e:
            logger.error("File download failed: %s", e, extra={"url": url})
            raise DownloadIOError(f"Download failed: {e}") from e

        return DownloadedFile(
            name=key,
            original_filename=key,
            content_type=response.get("ContentType"),
            content=content,
        )


# ---------------------------------------------------------------------------
# Mock S3 Client for Local Development
# ---------------------------------------------------------------------------

@dataclass
class _StoredObject:
    body: bytes
    content_type: Optional[str]
    acl: Optional[str]


@dataclass
class InMemoryS3Client:
    """
    In-memory stand-in for the boto3 S3 client.

    Implements only put_object, get_object and delete_object, with the
    same keyword arguments and response shapes. Missing buckets and keys
    raise botocore ClientError like the real service. Deleting a missing
    key succeeds, as it does on S3.

    Not suitable for production, but perfect for development and testing.
    """
    buckets: set[str] = field(default_factory=set)
    _objects: dict[tuple[str, str], _StoredObject] = field(default_factory=dict, repr=False)

    def put_object(
        self,
        *,
        Bucket: str,
        Key: str,
        Body: Any = b"",
        ContentType: Optional[str] = None,
        ContentLength: Optional[int] = None,
        ACL: Optional[str] = None,
        **kwargs: Any,
    ) -> dict:
        self._require_bucket(Bucket, "PutObject")
        data = Body.read() if hasattr(Body, "read") else bytes(Body)
        self._objects[(Bucket, Key)] = _StoredObject(
            body=data,
            content_type=ContentType,
            acl=ACL,
        )
        logger.debug(
            "Stored object in mock storage",
            extra={"bucket": Bucket, "key": Key, "size_bytes": len(data)}
        )
        return {"ETag": f'"{hashlib.md5(data, usedforsecurity=False).hexdigest()}"'}

    def get_object(self, *, Bucket: str, Key: str, **kwargs: Any) -> dict:
        self._require_bucket(Bucket, "GetObject")
        stored = self._objects.get((Bucket, Key))
        if stored is None:
            raise _client_error("NoSuchKey", "The specified key does not exist.", 404, "GetObject")
        return {
            "Body": io.BytesIO(stored.body),
            "ContentType": stored.content_type,
            "ContentLength": len(stored.body),
        }

    def delete_object(self, *, Bucket: str, Key: str, **kwargs: Any) -> dict:
        self._require_bucket(Bucket, "DeleteObject")
        self._objects.pop((Bucket, Key), None)
        logger.debug("Deleted object from mock storage", extra={"bucket": Bucket, "key": Key})
        return {}

    def object_acl(self, bucket: str, key: str) -> Optional[str]:
        """Canned ACL an object was stored with. Mock-only helper."""
        stored = self._objects.get((bucket, key))
        return stored.acl if stored else None

    def _require_bucket(self, bucket: str, operation: str) -> None:
        if bucket not in self.buckets:
            raise _client_error(
                "NoSuchBucket", "The specified bucket does not exist.", 404, operation
            )


def _client_error(code: str, message: str, status: int, operation: str) -> ClientError:
    return ClientError(
        {
            "Error": {"Code": code, "Message": message},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


# ---------------------------------------------------------------------------
# Factory Functions
# ---------------------------------------------------------------------------

def create_s3_client(config: StorageConfig) -> Any:
    """Build a boto3 S3 client from configuration."""
    s3_client = boto3.client(
        "s3",
        endpoint_url=config.endpoint_url,
        aws_access_key_id=config.access_key_id,
        aws_secret_access_key=config.secret_access_key,
        region_name=config.region,
        config=Config(signature_version="s3v4"),
    )

    logger.info(
        "Initialized S3 storage client",
        extra={
            "bucket": config.bucket_name,
            "region": config.region,
            "endpoint": config.endpoint_url,
        }
    )

    return s3_client


def create_file_storage(
    config: Optional[StorageConfig] = None,
    mock_mode: bool = False,
) -> S3FileStorage:
    """
    Create file storage based on configuration.

    Args:
        config: Storage configuration (required if not mock_mode)
        mock_mode: If True, back the storage with an in-memory client

    Returns:
        S3FileStorage bound to the configured bucket
    """
    if mock_mode:
        config = config or StorageConfig(
            access_key_id="",
            secret_access_key="",
            bucket_name="mock-bucket",
        )
        logger.info("Initialized mock storage client (in-memory)")
        return S3FileStorage(
            InMemoryS3Client(buckets={config.bucket_name}),
            config.bucket_name,
            public_base_url=config.object_base_url,
        )

    if config is None:
        raise ValueError("config is required when not in mock mode")

    return S3FileStorage(
        create_s3_client(config),
        config.bucket_name,
        public_base_url=config.object_base_url,
    )
