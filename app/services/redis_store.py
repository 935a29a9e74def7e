# app/services/redis_store.py

import redis.asyncio as redis

from app.core.config import LOCK_TIMEOUT_SECONDS


class RedisStore:
    """Key-value store on Redis; the allocation lock is a Redis lock,
    so it serializes allocation across every worker sharing the instance."""

    def __init__(self, client, lock_timeout: float = LOCK_TIMEOUT_SECONDS):
        self._client = client
        self._lock_timeout = lock_timeout

    @classmethod
    def from_url(cls, url: str) -> "RedisStore":
        return cls(redis.from_url(url, encoding="utf-8", decode_responses=True))

    async def get(self, key):
        return await self._client.get(key)

    async def put(self, key, value):
        await self._client.set(key, value)

    async def list_keys(self, prefix):
        keys = [key async for key in self._client.scan_iter(match=f"{prefix}*")]
        return sorted(keys)

    def lock(self, name):
        return self._client.lock(
            f"lock:{name}",
            timeout=self._lock_timeout,
            blocking_timeout=self._lock_timeout,
        )

    async def close(self):
        await self._client.aclose()
