"""
FastAPI integration for request handlers that store files.
"""
