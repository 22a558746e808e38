from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from learnroute.models.user import User
from learnroute.services import token_service
from tests.conftest import TEST_PASSWORD, mint_token


def _register(client: TestClient, **overrides):
    payload = {
        "username": "hopper",
        "password": "cobol-rules-1959",
        "email": "grace@example.com",
        "full_name": "Grace Hopper",
    }
    payload.update(overrides)
    return client.post("/api/register", json=payload)


# ---- register ----


def test_register_returns_token_and_profile(client: TestClient) -> None:
    resp = _register(client)
    assert resp.status_code == 201
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["username"] == "hopper"
    assert body["user"]["points"] == 0
    assert body["user"]["theme_preference"] == "dark"
    assert "password_hash" not in body["user"]

    claims = token_service.decode_access_token(body["access_token"])
    assert claims["sub"] == body["user"]["id"]
    assert claims["roles"] == ["user"]


def test_register_duplicate_username(client: TestClient) -> None:
    assert _register(client).status_code == 201
    resp = _register(client, email="other@example.com")
    assert resp.status_code == 409


@pytest.mark.parametrize(
    "overrides",
    [{"username": ""}, {"password": "short"}, {"email": "grace-at-example"}],
)
def test_register_validation(client: TestClient, overrides: dict) -> None:
    assert _register(client, **overrides).status_code == 422


# ---- login ----


def test_login(client: TestClient, user: User) -> None:
    resp = client.post(
        "/api/login", json={"username": user.username, "password": TEST_PASSWORD}
    )
    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == str(user.id)


def test_login_bad_password(client: TestClient, user: User) -> None:
    resp = client.post(
        "/api/login", json={"username": user.username, "password": "wrong-password"}
    )
    assert resp.status_code == 401


def test_login_unknown_user(client: TestClient) -> None:
    resp = client.post("/api/login", json={"username": "ghost", "password": "whatever1"})
    assert resp.status_code == 401


# ---- /api/user ----


def test_get_me(client: TestClient, user: User, headers: dict) -> None:
    resp = client.get("/api/user", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["username"] == user.username


def test_get_me_requires_token(client: TestClient) -> None:
    assert client.get("/api/user").status_code == 401


def test_get_me_rejects_garbage_token(client: TestClient) -> None:
    resp = client.get("/api/user", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401


def test_get_me_rejects_expired_token(client: TestClient, user: User) -> None:
    token = token_service.create_access_token(sub=str(user.id), ttl_minutes=-1)
    resp = client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token expired"


def test_get_me_rejects_non_uuid_subject(client: TestClient) -> None:
    token = mint_token(user_id="not-a-uuid")
    resp = client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_update_profile(client: TestClient, headers: dict) -> None:
    resp = client.patch(
        "/api/user",
        json={"bio": "Learning Rust", "profile_image": "https://img.example/a.png"},
        headers=headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["bio"] == "Learning Rust"
    assert body["profile_image"] == "https://img.example/a.png"


def test_update_profile_refreshes_leaderboard(client: TestClient, headers: dict) -> None:
    assert client.get("/api/leaderboard").json()[0]["full_name"] is None

    client.patch("/api/user", json={"full_name": "Ada Lovelace"}, headers=headers)

    assert client.get("/api/leaderboard").json()[0]["full_name"] == "Ada Lovelace"


def test_update_theme(client: TestClient, headers: dict) -> None:
    resp = client.post("/api/user/theme", json={"theme": "light"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["theme_preference"] == "light"


def test_update_theme_rejects_unknown(client: TestClient, headers: dict) -> None:
    resp = client.post("/api/user/theme", json={"theme": "neon"}, headers=headers)
    assert resp.status_code == 400
