"""
Redis content storage.

Keeps merchant assets in Redis as a key/value tree:
- every object is a hash ({ns}:obj:{key}) holding data and mime_type
- a sorted set ({ns}:index) holds every key with score 0, so a prefix
  listing is a ZRANGEBYLEX range

Object and index are always written together in a MULTI/EXEC pipeline.
"""

import logging
from typing import Any, Iterator, List, Optional

import redis
from redis.connection import ConnectionPool

from ..models.content import StoredObject
from .base import ContentAssetsManager
from .errors import StorageBackendError

logger = logging.getLogger(__name__)

LIST_BATCH_SIZE = 1000


class RedisContentAssetsManager(ContentAssetsManager):
    """Stores merchant assets in Redis."""

    backend_name = "redis"

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        namespace: str = "cms",
        client: Any = None,
    ):
        self.namespace = namespace
        self.index_key = f"{namespace}:index"

        if client is None:
            pool = ConnectionPool(
                host=host,
                port=port,
                db=db,
                decode_responses=False,  # asset bodies are binary
                max_connections=20,
                socket_timeout=5,
                socket_connect_timeout=5,
            )
            client = redis.Redis(connection_pool=pool)
            logger.info(f"Redis content storage at {host}:{port} (db={db})")

        self.client = client

    def _object_key(self, key: str) -> str:
        return f"{self.namespace}:obj:{key}"

    def put_object(self, key: str, data: bytes, mime_type: Optional[str] = None) -> None:
        try:
            pipe = self.client.pipeline(transaction=True)
            pipe.hset(self._object_key(key), mapping={"data": data, "mime_type": mime_type or ""})
            pipe.zadd(self.index_key, {key: 0})
            pipe.execute()
        except redis.RedisError as e:
            raise StorageBackendError(f"Redis write failed for {key}: {e}", details={"key": key})

    def get_object(self, key: str) -> Optional[StoredObject]:
        try:
            fields = self.client.hgetall(self._object_key(key))
        except redis.RedisError as e:
            raise StorageBackendError(f"Redis read failed for {key}: {e}", details={"key": key})

        if not fields or b"data" not in fields:
            return None

        mime_type = fields.get(b"mime_type", b"").decode("utf-8") or None
        return StoredObject(data=fields[b"data"], mime_type=mime_type)

    def list_keys(self, prefix: str) -> Iterator[str]:
        low = b"[" + prefix.encode("utf-8")
        high = low + b"\xff"
        start = 0
        while True:
            try:
                batch = self.client.zrangebylex(
                    self.index_key, low, high, start=start, num=LIST_BATCH_SIZE
                )
            except redis.RedisError as e:
                raise StorageBackendError(
                    f"Redis listing failed for {prefix}: {e}", details={"prefix": prefix}
                )

            for member in batch:
                yield member.decode("utf-8") if isinstance(member, bytes) else member

            if len(batch) < LIST_BATCH_SIZE:
                return
            start += LIST_BATCH_SIZE

    def delete_object(self, key: str) -> bool:
        try:
            pipe = self.client.pipeline(transaction=True)
            pipe.delete(self._object_key(key))
            pipe.zrem(self.index_key, key)
            deleted, _ = pipe.execute()
        except redis.RedisError as e:
            raise StorageBackendError(f"Redis delete failed for {key}: {e}", details={"key": key})
        return deleted > 0

    def delete_prefix(self, prefix: str) -> int:
        keys: List[str] = list(self.list_keys(prefix))
        for start in range(0, len(keys), LIST_BATCH_SIZE):
            batch = keys[start:start + LIST_BATCH_SIZE]
            try:
                pipe = self.client.pipeline(transaction=True)
                pipe.delete(*[self._object_key(k) for k in batch])
                pipe.zrem(self.index_key, *batch)
                pipe.execute()
            except redis.RedisError as e:
                raise StorageBackendError(
                    f"Redis delete failed for {prefix}: {e}", details={"prefix": prefix}
                )
        return len(keys)

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError as e:
            logger.error(f"Redis PING error: {e}")
            return False
