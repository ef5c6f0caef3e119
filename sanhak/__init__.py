"""
Sanhak backend - file storage for user-submitted images and documents.

This package contains:
- core: Framework-agnostic file rules (extensions, keys, URLs)
- infrastructure: Object storage integration (S3 via boto3)
- api: FastAPI dependencies for upstream request handlers
- config: Application configuration
"""

__version__ = "0.1.0"
