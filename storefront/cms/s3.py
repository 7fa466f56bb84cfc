"""
Amazon S3 content storage.
"""

import logging
from typing import Any, Iterator, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..models.content import StoredObject
from .base import ContentAssetsManager
from .errors import ConfigurationError, StorageBackendError

logger = logging.getLogger(__name__)

# delete_objects accepts at most 1000 keys per request
DELETE_BATCH_SIZE = 1000

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


def _is_not_found(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") in _NOT_FOUND_CODES


class S3ContentAssetsManager(ContentAssetsManager):
    """
    Stores merchant assets in an S3 bucket.

    Listing goes through the list_objects_v2 paginator so buckets with
    more than 1000 keys per prefix are listed completely.
    """

    backend_name = "aws"

    def __init__(
        self,
        bucket: str,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        client: Any = None,
    ):
        if not bucket:
            raise ConfigurationError("CMS_AWS_BUCKET is required for the aws backend")

        self.bucket = bucket
        self.client = client or boto3.client(
            "s3", region_name=region, endpoint_url=endpoint_url
        )
        logger.info(f"S3 content storage in bucket {bucket}")

    def put_object(self, key: str, data: bytes, mime_type: Optional[str] = None) -> None:
        params = {"Bucket": self.bucket, "Key": key, "Body": data}
        if mime_type:
            params["ContentType"] = mime_type
        try:
            self.client.put_object(**params)
        except (ClientError, BotoCoreError) as e:
            raise StorageBackendError(f"S3 upload failed for {key}: {e}", details={"key": key})

    def get_object(self, key: str) -> Optional[StoredObject]:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            body = response["Body"]
            try:
                data = body.read()
            finally:
                body.close()
            return StoredObject(data=data, mime_type=response.get("ContentType"))
        except ClientError as e:
            if _is_not_found(e):
                return None
            raise StorageBackendError(f"S3 download failed for {key}: {e}", details={"key": key})
        except BotoCoreError as e:
            raise StorageBackendError(f"S3 download failed for {key}: {e}", details={"key": key})

    def list_keys(self, prefix: str) -> Iterator[str]:
        paginator = self.client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                for item in page.get("Contents", []):
                    yield item["Key"]
        except (ClientError, BotoCoreError) as e:
            raise StorageBackendError(f"S3 listing failed for {prefix}: {e}", details={"prefix": prefix})

    def _exists(self, key: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError as e:
            if _is_not_found(e):
                return False
            raise StorageBackendError(f"S3 head failed for {key}: {e}", details={"key": key})

    def delete_object(self, key: str) -> bool:
        # S3 deletes are idempotent, so existence is checked first
        if not self._exists(key):
            return False
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
            return True
        except (ClientError, BotoCoreError) as e:
            raise StorageBackendError(f"S3 delete failed for {key}: {e}", details={"key": key})

    def delete_prefix(self, prefix: str) -> int:
        keys = list(self.list_keys(prefix))
        deleted = 0
        for start in range(0, len(keys), DELETE_BATCH_SIZE):
            batch: List[str] = keys[start:start + DELETE_BATCH_SIZE]
            try:
                response = self.client.delete_objects(
                    Bucket=self.bucket,
                    Delete={"Objects": [{"Key": k} for k in batch], "Quiet": True},
                )
            except (ClientError, BotoCoreError) as e:
                raise StorageBackendError(
                    f"S3 batch delete failed for {prefix}: {e}", details={"prefix": prefix}
                )

            errors = response.get("Errors", [])
            if errors:
                raise StorageBackendError(
                    f"S3 batch delete failed for {len(errors)} keys under {prefix}",
                    details={"prefix": prefix, "keys": [err.get("Key") for err in errors]},
                )
            deleted += len(batch)
        return deleted

    def ping(self) -> bool:
        try:
            self.client.head_bucket(Bucket=self.bucket)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 bucket check failed for {self.bucket}: {e}")
            return False
