# app/core/code_status.py

import asyncio

from app.services.code_store import CodeStore
from app.services.kv_store import build_store

async def code_status():
    store = build_store()
    try:
        status = await CodeStore(store).get_status()
        print(f"Total codes: {status.total}, claimed: {status.claimed}, remaining: {status.remaining}")
        return status
    finally:
        await store.close()

if __name__ == "__main__":
    asyncio.run(code_status())
