"""
Redis quota store
Monthly counters kept in Redis with INCR
"""

import redis.asyncio as redis

from ...core.exceptions import StorageError
from ...domain.ports.storage_port import IQuotaStore

# Counters outlive their month by a little so late reads still see them
COUNTER_TTL_SECONDS = 40 * 24 * 60 * 60


class RedisQuotaStore(IQuotaStore):
    """
    Redis quota store

    INCR is atomic on the server, so concurrent requests never share a
    post-increment value.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int = COUNTER_TTL_SECONDS):
        self._client = client
        self._ttl_seconds = ttl_seconds

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisQuotaStore":
        client = redis.from_url(url, decode_responses=True, socket_timeout=2)
        return cls(client, **kwargs)

    async def increment(self, key: str) -> int:
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.incr(key)
                pipe.expire(key, self._ttl_seconds)
                value, _ = await pipe.execute()
        except redis.RedisError as e:
            raise StorageError(f"Quota increment failed: {e}", details={"key": key}) from e
        return int(value)

    async def get(self, key: str) -> int:
        try:
            value = await self._client.get(key)
        except redis.RedisError as e:
            raise StorageError(f"Quota read failed: {e}", details={"key": key}) from e
        return int(value) if value is not None else 0

    async def health_check(self) -> bool:
        try:
            return bool(await self._client.ping())
        except redis.RedisError:
            return False

    async def close(self) -> None:
        await self._client.aclose()
