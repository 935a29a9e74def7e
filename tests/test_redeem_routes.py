from __future__ import annotations

from fastapi.testclient import TestClient

from tests.helpers import admin_post


def _load(client: TestClient, codes: list[str]) -> None:
    response = admin_post(client, "load_codes", codes=codes, reset=True)
    assert response.status_code == 200


def test_redeem_flow(client: TestClient) -> None:
    _load(client, ["X1", "X2"])

    first = client.post("/api/redeem", json={"name": "Al", "email": "al@x.com"})
    second = client.post("/api/redeem", json={"name": "Bo", "email": "bo@x.com"})
    third = client.post("/api/redeem", json={"name": "Cy", "email": "cy@x.com"})

    assert first.json() == {"status": "success", "code": "X1", "remaining": 1, "total": 2}
    assert second.json() == {"status": "success", "code": "X2", "remaining": 0, "total": 2}
    assert third.status_code == 200
    assert third.json() == {"status": "exhausted"}


def test_redeem_replay(client: TestClient) -> None:
    _load(client, ["X1", "X2"])
    client.post("/api/redeem", json={"name": "Al", "email": "al@x.com"})

    response = client.post("/api/redeem", json={"name": "Al", "email": " AL@x.com "})

    assert response.json() == {"status": "already_claimed", "code": "X1", "name": "Al"}
    assert client.get("/api/redeem").json() == {"total": 2, "claimed": 1, "remaining": 1}


def test_redeem_without_codes(client: TestClient) -> None:
    response = client.post("/api/redeem", json={"name": "Al", "email": "al@x.com"})
    assert response.status_code == 200
    assert response.json() == {"status": "exhausted", "error": "No promo codes available."}


def test_redeem_rejects_invalid_input(client: TestClient) -> None:
    _load(client, ["X1"])

    response = client.post("/api/redeem", json={"name": "", "email": "a@b.com"})

    assert response.status_code == 400
    assert response.json() == {"error": "valid name and email required"}
    assert response.headers["access-control-allow-origin"] == "*"
    assert client.get("/api/redeem").json()["claimed"] == 0


def test_redeem_rejects_invalid_json(client: TestClient) -> None:
    response = client.post(
        "/api/redeem", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON body"}


def test_redeem_status_without_codes(client: TestClient) -> None:
    response = client.get("/api/redeem")
    assert response.status_code == 200
    assert response.json() == {"total": 0, "claimed": 0, "remaining": 0}
    assert response.headers["access-control-allow-methods"] == "POST, GET, OPTIONS"


def test_redeem_preflight(client: TestClient) -> None:
    response = client.options("/api/redeem")
    assert response.status_code == 204
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-headers"] == "Content-Type"


def test_bare_paths_are_served(client: TestClient) -> None:
    _load(client, ["X1"])
    response = client.post("/redeem", json={"name": "Al", "email": "al@x.com"})
    assert response.json()["code"] == "X1"
    assert client.get("/").json() == {"message": "Promo code API is up and running"}


def test_store_failure_returns_json_error_with_cors(client: TestClient, store, monkeypatch) -> None:
    _load(client, ["X1"])

    async def unavailable(key: str):
        raise ConnectionError("store unavailable")

    monkeypatch.setattr(store, "get", unavailable)

    for response in (
        client.post("/api/redeem", json={"name": "Al", "email": "al@x.com"}),
        client.get("/api/redeem"),
    ):
        assert response.status_code == 500
        assert response.json() == {"error": "Internal error"}
        assert response.headers["access-control-allow-origin"] == "*"
