# app/services/kv_store.py

"""Key-value store seam used by the code store and the claim registry.

Backends offer plain ``get`` / ``put`` / ``list_keys`` plus a named lock that
serves as the single-writer point for code allocation. Nothing else is
assumed: no transactions, no conditional writes.
"""

import asyncio
from typing import AsyncContextManager, Dict, List, Optional, Protocol

from app.core import config


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Optional[str]: ...

    async def put(self, key: str, value: str) -> None: ...

    async def list_keys(self, prefix: str) -> List[str]: ...

    def lock(self, name: str) -> AsyncContextManager: ...

    async def close(self) -> None: ...


class LocalLocks:
    """Named ``asyncio.Lock`` objects, shared by every caller in this process."""

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock(self, name: str) -> asyncio.Lock:
        if name not in self._locks:
            self._locks[name] = asyncio.Lock()
        return self._locks[name]


class MemoryStore:
    """Process-local store for development and tests."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})
        self._locks = LocalLocks()

    async def get(self, key: str) -> Optional[str]:
        await asyncio.sleep(0)
        return self.data.get(key)

    async def put(self, key: str, value: str) -> None:
        await asyncio.sleep(0)
        self.data[key] = value

    async def list_keys(self, prefix: str) -> List[str]:
        await asyncio.sleep(0)
        return sorted(k for k in self.data if k.startswith(prefix))

    def lock(self, name: str) -> asyncio.Lock:
        return self._locks.lock(name)

    async def close(self) -> None:
        return None


def build_store(backend: Optional[str] = None) -> KeyValueStore:
    """Create the store selected by ``STORE_BACKEND``."""
    backend = (backend or config.STORE_BACKEND).lower()
    if backend == "redis":
        from app.services.redis_store import RedisStore

        return RedisStore.from_url(config.REDIS_URL)
    if backend == "sql":
        from app.services.sql_store import SQLStore

        return SQLStore.from_url(config.DATABASE_URL)
    if backend == "memory":
        return MemoryStore()
    raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")
