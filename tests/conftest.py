from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.core import config
from app.main import create_app
from app.services.claim_allocator import ClaimAllocator
from app.services.kv_store import MemoryStore
from tests.helpers import ADMIN_SECRET


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def allocator(store: MemoryStore) -> ClaimAllocator:
    return ClaimAllocator(store)


@pytest.fixture
def client(store: MemoryStore, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(config, "ADMIN_SECRET", ADMIN_SECRET)
    with TestClient(create_app(store=store)) as test_client:
        yield test_client
