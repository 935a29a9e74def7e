# app/services/sql_store.py

from sqlalchemy.future import select

from app.models.kv_entry import Base, KVEntry
from app.services.database import make_engine, make_session_factory
from app.services.kv_store import LocalLocks


class SQLStore:
    """Key-value store on a single ``kv_entries`` table.

    The allocation lock is process-local, so run a single worker process
    against this backend.
    """

    def __init__(self, engine):
        self.engine = engine
        self.SessionLocal = make_session_factory(engine)
        self._locks = LocalLocks()

    @classmethod
    def from_url(cls, url: str) -> "SQLStore":
        return cls(make_engine(url))

    async def create_tables(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def get(self, key):
        async with self.SessionLocal() as session:
            entry = await session.get(KVEntry, key)
            return entry.value if entry else None

    async def put(self, key, value):
        async with self.SessionLocal() as session:
            async with session.begin():
                await session.merge(KVEntry(key=key, value=value))

    async def list_keys(self, prefix):
        async with self.SessionLocal() as session:
            result = await session.execute(
                select(KVEntry.key).filter(KVEntry.key.startswith(prefix)).order_by(KVEntry.key)
            )
            return list(result.scalars().all())

    def lock(self, name):
        return self._locks.lock(name)

    async def close(self):
        await self.engine.dispose()
