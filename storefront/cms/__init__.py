"""
Content Management Storage
Pluggable per-merchant-store asset storage (local, S3, GCS, Redis).
"""

from .base import ContentAssetsManager
from .errors import (
    ConfigurationError,
    ContentNotFoundError,
    ContentStorageError,
    InvalidContentError,
    StorageBackendError,
)
from .factory import create_content_manager, get_content_manager, reset_content_manager
from .local import LocalContentAssetsManager

__all__ = [
    "ContentAssetsManager",
    "LocalContentAssetsManager",
    "create_content_manager",
    "get_content_manager",
    "reset_content_manager",
    "ContentStorageError",
    "ContentNotFoundError",
    "InvalidContentError",
    "StorageBackendError",
    "ConfigurationError",
]
