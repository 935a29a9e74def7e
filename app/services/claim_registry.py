# app/services/claim_registry.py

from datetime import datetime
from typing import List, Optional

from app.models.claim import Claim
from app.services.kv_store import KeyValueStore

CLAIM_PREFIX = "claim:"


def claim_key(email: str) -> str:
    return f"{CLAIM_PREFIX}{email}"


class ClaimRegistry:
    """Claim records keyed by normalized email."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def get(self, email: str) -> Optional[Claim]:
        raw = await self.store.get(claim_key(email))
        if raw is None:
            return None
        return Claim.model_validate_json(raw)

    async def put(self, claim: Claim) -> None:
        await self.store.put(claim_key(claim.email), claim.model_dump_json(by_alias=True))

    async def list_claims(self) -> List[Claim]:
        """Every claim, oldest first."""
        claims = []
        for key in await self.store.list_keys(CLAIM_PREFIX):
            raw = await self.store.get(key)
            if raw:
                claims.append(Claim.model_validate_json(raw))
        claims.sort(key=lambda claim: claim.claimed_at)
        return claims

    async def next_index(self, since: Optional[datetime] = None) -> int:
        """One past the highest index among claims made at or after ``since``,
        or 0 when there are none."""
        claims = await self.list_claims()
        if since is not None:
            claims = [claim for claim in claims if claim.claimed_at >= since]
        return max((claim.index + 1 for claim in claims), default=0)
