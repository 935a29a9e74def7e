# app/core/load_codes.py

import argparse
import asyncio
from pathlib import Path

from app.core.logging import get_logger
from app.services.claim_allocator import ClaimAllocator
from app.services.kv_store import build_store

logger = get_logger("promo_drop.load_codes")


def read_codes_file(path) -> list:
    """One code per line; blank lines and ``#`` comments are skipped."""
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip() and not line.strip().startswith("#")]


async def load_codes(path, reset: bool = False, store=None):
    store = store if store is not None else build_store()
    try:
        codes = read_codes_file(path)
        return await ClaimAllocator(store).load_codes(codes, reset_claims=reset)
    finally:
        await store.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Load promo codes from a text file")
    parser.add_argument("path", help="file with one code per line")
    parser.add_argument("--reset", action="store_true", help="reset the claimed count to 0")
    args = parser.parse_args(argv)
    status = asyncio.run(load_codes(args.path, reset=args.reset))
    print(f"Total codes: {status.total}, claimed: {status.claimed}, remaining: {status.remaining}")


if __name__ == "__main__":
    main()
