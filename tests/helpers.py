from __future__ import annotations

from fastapi.testclient import TestClient

ADMIN_SECRET = "test-admin-secret"


def admin_post(client: TestClient, action: str, **body):
    return client.post("/api/admin", json={"secret": ADMIN_SECRET, "action": action, **body})
