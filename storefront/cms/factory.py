"""
Content manager selection.
"""

import logging
import threading
from typing import Optional

from ..config.settings import CMS_METHODS, CMSSettings, get_cms_settings
from .base import ContentAssetsManager
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

_manager: Optional[ContentAssetsManager] = None
_lock = threading.Lock()


def create_content_manager(settings: CMSSettings) -> ContentAssetsManager:
    """
    Build the manager named by settings.method.

    Backend modules are imported on demand so only the selected SDK
    has to be configured.
    """
    method = settings.method

    if method == "local":
        from .local import LocalContentAssetsManager

        return LocalContentAssetsManager(settings.local_root)

    if method == "aws":
        from .s3 import S3ContentAssetsManager

        return S3ContentAssetsManager(
            bucket=settings.aws_bucket,
            region=settings.aws_region,
            endpoint_url=settings.aws_endpoint_url,
        )

    if method == "gcp":
        from .gcs import GCSContentAssetsManager

        return GCSContentAssetsManager(bucket_name=settings.gcp_bucket, project=settings.gcp_project)

    if method == "redis":
        from .redis_store import RedisContentAssetsManager

        return RedisContentAssetsManager(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            namespace=settings.redis_namespace,
        )

    raise ConfigurationError(
        f"Unknown CMS_METHOD {method!r}, expected one of {', '.join(CMS_METHODS)}",
        details={"method": method},
    )


def get_content_manager(settings: Optional[CMSSettings] = None) -> ContentAssetsManager:
    """Get global content manager (thread-safe singleton)."""
    global _manager
    if _manager is None:
        with _lock:
            if _manager is None:
                settings = settings or get_cms_settings()
                _manager = create_content_manager(settings)
                logger.info(f"Content manager initialized: {_manager!r}")
    return _manager


def reset_content_manager() -> None:
    """Reset the manager (useful for testing)."""
    global _manager
    with _lock:
        _manager = None
