"""
Core business rules for stored files.

This module is framework-agnostic - it doesn't import FastAPI or boto3.
The rules for what may be stored, and how keys and URLs relate, can be
tested without any object storage.
"""
