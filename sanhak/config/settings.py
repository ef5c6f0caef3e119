"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables with sensible defaults.
Using Pydantic's BaseSettings means we get:
- Type validation at startup (fail fast if config is wrong)
- Documentation of what's required vs optional
- Easy testing with different configurations

Mock mode enables local development without an S3 bucket.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..infrastructure.storage.client import DEFAULT_REGION, StorageConfig


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    The bucket identity is read once per process and never changes.
    """

    # S3 Storage Configuration
    aws_access_key_id: str = Field(
        default="",
        description="AWS access key ID with put/get/delete rights on the bucket"
    )
    aws_secret_access_key: str = Field(
        default="",
        description="AWS secret access key"
    )
    aws_region: str = Field(
        default=DEFAULT_REGION,
        description="Region of the bucket. Also used to build public object URLs."
    )
    s3_bucket_name: str = Field(
        default="sanhak-files",
        description="Bucket holding uploaded images and PDFs"
    )
    s3_endpoint_url: Optional[str] = Field(
        default=None,
        description="Custom S3 endpoint (MinIO, LocalStack). Leave empty for AWS."
    )
    s3_public_base_url: Optional[str] = Field(
        default=None,
        description="Base URL objects are served from, e.g. a CDN domain. "
                    "Defaults to the virtual-hosted bucket URL."
    )
    s3_mock_mode: bool = Field(
        default=False,
        description="Use in-memory mock instead of real S3. Enables local dev without a bucket."
    )

    # Application Behavior
    max_upload_size_mb: int = Field(
        default=10,
        description="Maximum size of a single uploaded file in MB."
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    def storage_config(self) -> StorageConfig:
        """Build the storage client configuration from these settings."""
        return StorageConfig(
            access_key_id=self.aws_access_key_id,
            secret_access_key=self.aws_secret_access_key,
            bucket_name=self.s3_bucket_name,
            region=self.aws_region,
            endpoint_url=self.s3_endpoint_url or None,
            public_base_url=self.s3_public_base_url or None,
        )

    def validate_required_fields(self) -> list[str]:
        """
        Validate that required fields are set based on mock mode settings.

        Returns list of missing required fields.
        This is separate from Pydantic validation because requirements
        depend on whether we're in mock mode.
        """
        missing = []

        if not self.s3_bucket_name:
            missing.append("S3_BUCKET_NAME")

        # Credentials only required if not in mock mode
        if not self.s3_mock_mode:
            if not self.aws_access_key_id:
                missing.append("AWS_ACCESS_KEY_ID")
            if not self.aws_secret_access_key:
                missing.append("AWS_SECRET_ACCESS_KEY")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache means we only load settings once per process.
    This is safe because settings don't change during runtime.
    For tests, you can call get_settings.cache_clear() to reset.
    """
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=settings.log_level.upper(),
    )
