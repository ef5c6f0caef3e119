"""
Infrastructure layer - external service integrations.

- storage: Object storage (S3) for uploaded images and PDFs

These wrappers translate between the SDK and our domain models.
"""
