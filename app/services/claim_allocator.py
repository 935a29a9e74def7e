# app/services/claim_allocator.py

"""Hands out codes, one per email.

Allocation reads the claimed count, writes the new claim, then writes the
incremented count. The store cannot do that atomically, so the whole step
runs under the store's ``allocate`` lock: with the Redis backend the lock is
shared by every worker, with the memory and SQL backends only by coroutines
of this process. Loading codes takes the same lock.

The index being allocated is written to ``claim_pending`` before the claim
and cleared after the count. A marker left behind means the count may lag
the claims, and whichever allocator takes the lock next reconciles it.
"""

from datetime import datetime, timezone

from app.core.errors import InvalidInput
from app.core.logging import get_logger
from app.models.claim import AlreadyClaimed, Claim, ClaimResult, CodeStatus, Exhausted, Success
from app.services.claim_registry import ClaimRegistry
from app.services.code_store import CodeStore, clean_codes
from app.services.kv_store import KeyValueStore

logger = get_logger("promo_drop.claim_allocator")

ALLOCATION_LOCK = "allocate"
PENDING_KEY = "claim_pending"


def normalize_email(email) -> str:
    return (email or "").strip().lower()


def validate_requester(name, email):
    """Return the trimmed name and normalized email, or raise InvalidInput."""
    name = name.strip() if isinstance(name, str) else ""
    email = normalize_email(email) if isinstance(email, str) else ""
    if not name or not email or "@" not in email or "." not in email:
        raise InvalidInput("valid name and email required")
    return name, email


class ClaimAllocator:
    def __init__(self, store: KeyValueStore):
        self.store = store
        self.codes = CodeStore(store)
        self.claims = ClaimRegistry(store)

    async def redeem(self, name, email) -> ClaimResult:
        name, email = validate_requester(name, email)

        existing = await self.claims.get(email)
        if existing is not None:
            logger.info("claim.replayed", email=email, index=existing.index)
            return AlreadyClaimed(code=existing.code, name=existing.name)

        async with self.store.lock(ALLOCATION_LOCK):
            # A concurrent request for the same email may have won the lock first
            existing = await self.claims.get(email)
            if existing is not None:
                logger.info("claim.replayed", email=email, index=existing.index)
                return AlreadyClaimed(code=existing.code, name=existing.name)
            return await self._allocate(name, email)

    async def _allocate(self, name: str, email: str) -> ClaimResult:
        codes = await self.codes.get_codes()
        if not codes:
            logger.warning("claim.no_codes", email=email)
            return Exhausted(error="No promo codes available.")

        if await self.store.get(PENDING_KEY):
            await self._reconcile()

        claimed_count = await self.codes.get_claimed_count()
        if claimed_count >= len(codes):
            logger.info("claim.exhausted", email=email, total=len(codes))
            return Exhausted()

        index = claimed_count
        new_count = index + 1
        claim = Claim(
            code=codes[index],
            name=name,
            email=email,
            claimed_at=datetime.now(timezone.utc),
            index=index,
        )
        await self.store.put(PENDING_KEY, str(index))
        await self.claims.put(claim)
        try:
            await self.codes.set_claimed_count(new_count)
        except Exception:
            logger.exception("claim.count_write_failed", email=email, index=index)
            raise
        await self.store.put(PENDING_KEY, "")

        logger.info("claim.allocated", email=email, index=index, remaining=len(codes) - new_count)
        logger.debug("claim.code", email=email, code=claim.code)
        return Success(code=claim.code, remaining=len(codes) - new_count, total=len(codes))

    async def load_codes(self, codes, reset_claims: bool = False) -> CodeStatus:
        """Replace the code list without interleaving with an allocation."""
        clean_codes(codes)
        async with self.store.lock(ALLOCATION_LOCK):
            return await self.codes.load_codes(codes, reset_claims=reset_claims)

    async def reconcile_claimed_count(self) -> int:
        """Raise the claimed count to cover every recorded claim."""
        async with self.store.lock(ALLOCATION_LOCK):
            return await self._reconcile()

    async def _reconcile(self) -> int:
        claimed_count = await self.codes.get_claimed_count()
        next_index = await self.claims.next_index(since=await self.codes.get_reset_at())
        if next_index > claimed_count:
            logger.warning("claim.count_reconciled", previous=claimed_count, current=next_index)
            await self.codes.set_claimed_count(next_index)
            claimed_count = next_index
        await self.store.put(PENDING_KEY, "")
        return claimed_count
