# app/services/code_store.py

import json
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from app.core.errors import InvalidInput
from app.core.logging import get_logger
from app.models.claim import CodeStatus
from app.services.kv_store import KeyValueStore

logger = get_logger("promo_drop.code_store")

CODES_KEY = "codes"
CLAIMED_COUNT_KEY = "claimed_count"
# When the count was last reset; claims older than this belong to a previous batch
RESET_AT_KEY = "claims_reset_at"


def clean_codes(codes) -> List[str]:
    """Validate an admin-supplied code list; entries are stripped."""
    if not isinstance(codes, list) or not codes:
        raise InvalidInput("Provide a 'codes' array")
    cleaned = []
    for code in codes:
        if not isinstance(code, str) or not code.strip():
            raise InvalidInput("Provide a 'codes' array")
        cleaned.append(code.strip())
    return cleaned


class CodeStore:
    """The loaded code list and the running claimed count."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def load_codes(self, codes: Sequence[str], reset_claims: bool = False) -> CodeStatus:
        cleaned = clean_codes(codes)
        await self.store.put(CODES_KEY, json.dumps(cleaned))
        if reset_claims:
            await self.set_claimed_count(0)
            await self.store.put(RESET_AT_KEY, datetime.now(timezone.utc).isoformat())
        status = await self.get_status()
        logger.info(
            "codes.loaded",
            total=status.total,
            claimed=status.claimed,
            reset=bool(reset_claims),
        )
        return status

    async def get_codes(self) -> List[str]:
        raw = await self.store.get(CODES_KEY)
        return json.loads(raw) if raw else []

    async def get_claimed_count(self) -> int:
        raw = await self.store.get(CLAIMED_COUNT_KEY)
        return int(raw) if raw else 0

    async def set_claimed_count(self, value: int) -> None:
        # Only the allocator and a reset load write the counter
        await self.store.put(CLAIMED_COUNT_KEY, str(int(value)))

    async def get_reset_at(self) -> Optional[datetime]:
        raw = await self.store.get(RESET_AT_KEY)
        return datetime.fromisoformat(raw) if raw else None

    async def get_status(self) -> CodeStatus:
        codes = await self.get_codes()
        if not codes:
            return CodeStatus(total=0, claimed=0, remaining=0)
        claimed = await self.get_claimed_count()
        return CodeStatus(
            total=len(codes),
            claimed=claimed,
            remaining=max(0, len(codes) - claimed),
        )
