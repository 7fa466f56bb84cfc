"""
Google Cloud Storage content storage.
"""

import logging
from typing import Any, Iterator, Optional

from google.api_core import exceptions as gcp_exceptions
from google.cloud import storage

from ..models.content import StoredObject
from .base import ContentAssetsManager
from .errors import ConfigurationError, StorageBackendError

logger = logging.getLogger(__name__)


class GCSContentAssetsManager(ContentAssetsManager):
    """Stores merchant assets in a GCS bucket."""

    backend_name = "gcp"

    def __init__(self, bucket_name: str, project: Optional[str] = None, client: Any = None):
        if not bucket_name:
            raise ConfigurationError("CMS_GCP_BUCKET is required for the gcp backend")

        self.bucket_name = bucket_name
        self.client = client or storage.Client(project=project)
        self.bucket = self.client.bucket(bucket_name)
        logger.info(f"GCS content storage in bucket gs://{bucket_name}")

    def put_object(self, key: str, data: bytes, mime_type: Optional[str] = None) -> None:
        blob = self.bucket.blob(key)
        try:
            blob.upload_from_string(data, content_type=mime_type or "application/octet-stream")
        except gcp_exceptions.GoogleAPIError as e:
            raise StorageBackendError(
                f"GCS upload failed for gs://{self.bucket_name}/{key}: {e}", details={"key": key}
            )

    def get_object(self, key: str) -> Optional[StoredObject]:
        try:
            blob = self.bucket.get_blob(key)
            if blob is None:
                return None
            return StoredObject(data=blob.download_as_bytes(), mime_type=blob.content_type)
        except gcp_exceptions.NotFound:
            return None
        except gcp_exceptions.GoogleAPIError as e:
            raise StorageBackendError(
                f"GCS download failed for gs://{self.bucket_name}/{key}: {e}", details={"key": key}
            )

    def list_keys(self, prefix: str) -> Iterator[str]:
        try:
            # list_blobs follows page tokens itself
            for blob in self.client.list_blobs(self.bucket_name, prefix=prefix):
                yield blob.name
        except gcp_exceptions.GoogleAPIError as e:
            raise StorageBackendError(
                f"GCS listing failed for gs://{self.bucket_name}/{prefix}: {e}",
                details={"prefix": prefix},
            )

    def delete_object(self, key: str) -> bool:
        try:
            self.bucket.blob(key).delete()
            return True
        except gcp_exceptions.NotFound:
            return False
        except gcp_exceptions.GoogleAPIError as e:
            raise StorageBackendError(
                f"GCS delete failed for gs://{self.bucket_name}/{key}: {e}", details={"key": key}
            )

    def ping(self) -> bool:
        try:
            return self.bucket.exists()
        except gcp_exceptions.GoogleAPIError as e:
            logger.error(f"GCS bucket check failed for {self.bucket_name}: {e}")
            return False
