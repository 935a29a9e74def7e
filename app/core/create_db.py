# app/core/create_db.py

import asyncio

from app.core.config import DATABASE_URL
from app.services.sql_store import SQLStore

async def init_db(url: str = DATABASE_URL):
    store = SQLStore.from_url(url)
    try:
        await store.create_tables()
    finally:
        await store.close()

if __name__ == "__main__":
    asyncio.run(init_db())
