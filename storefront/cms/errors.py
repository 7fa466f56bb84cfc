"""
Content storage exceptions.
"""

from typing import Optional


class ContentStorageError(Exception):
    """Base exception for content storage operations."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ContentNotFoundError(ContentStorageError):
    """Raised when a file, image or folder does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Content not found: {path}", details={"path": path})
        self.path = path


class InvalidContentError(ContentStorageError):
    """Raised when a file name, folder, type or payload is rejected."""

    pass


class StorageBackendError(ContentStorageError):
    """Raised when the underlying storage (disk, S3, GCS, Redis) fails."""

    pass


class ConfigurationError(ContentStorageError):
    """Raised when the storage backend is misconfigured."""

    pass
