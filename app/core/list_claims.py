# app/core/list_claims.py

import asyncio

from app.services.claim_registry import ClaimRegistry
from app.services.kv_store import build_store

async def list_claims():
    store = build_store()
    try:
        claims = await ClaimRegistry(store).list_claims()
        # Print each claim, oldest first
        for claim in claims:
            print(f"#{claim.index}: {claim.code}, Name: {claim.name}, Email: {claim.email}, Claimed: {claim.claimed_at.isoformat()}")
        return claims
    finally:
        await store.close()

if __name__ == "__main__":
    asyncio.run(list_claims())
