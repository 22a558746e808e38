"""HTTP tests for roadmap creation, step toggling and completion."""

from __future__ import annotations

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from learnroute.models.user import User
from tests.conftest import auth_headers, create_test_user, mint_token


def _create(client: TestClient, headers: dict, category: str = "web-development") -> dict:
    resp = client.post(
        "/api/roadmaps",
        json={"title": "My path", "category": category, "description": "notes"},
        headers=headers,
    )
    assert resp.status_code == 201
    return resp.json()


# ---- creation and reads ----


def test_create_roadmap(client: TestClient, user: User, headers: dict) -> None:
    body = _create(client, headers)
    assert body["user_id"] == str(user.id)
    assert body["progress"] == 0
    assert body["completed"] is False
    assert body["completed_at"] is None
    assert len(body["steps"]) == 8
    assert body["steps"][0]["resource_ids"] == [1, 2]


def test_create_roadmap_requires_token(client: TestClient) -> None:
    resp = client.post("/api/roadmaps", json={"title": "x", "category": "devops"})
    assert resp.status_code == 401


def test_create_roadmap_rejects_blank_title(client: TestClient, headers: dict) -> None:
    resp = client.post(
        "/api/roadmaps", json={"title": " ", "category": "devops"}, headers=headers
    )
    assert resp.status_code == 400


def test_get_roadmap(client: TestClient, headers: dict) -> None:
    created = _create(client, headers)
    resp = client.get(f"/api/roadmaps/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created


@pytest.mark.parametrize("roadmap_id", [str(uuid4()), "not-a-uuid"])
def test_get_roadmap_not_found(client: TestClient, roadmap_id: str) -> None:
    assert client.get(f"/api/roadmaps/{roadmap_id}").status_code == 404


def test_list_user_roadmaps(client: TestClient, user: User, headers: dict) -> None:
    _create(client, headers, "devops")
    _create(client, headers, "blockchain")
    resp = client.get(f"/api/users/{user.id}/roadmaps")
    assert resp.status_code == 200
    assert sorted(r["category"] for r in resp.json()) == ["blockchain", "devops"]

    assert client.get(f"/api/users/{uuid4()}/roadmaps").json() == []


def test_categories(client: TestClient) -> None:
    resp = client.get("/api/categories")
    assert resp.status_code == 200
    assert "machine-learning" in resp.json()
    assert len(resp.json()) == 7


# ---- step toggles ----


def test_toggle_steps_updates_progress(client: TestClient, headers: dict) -> None:
    roadmap = _create(client, headers)
    for step in roadmap["steps"][:3]:
        resp = client.patch(
            f"/api/roadmaps/{roadmap['id']}/steps/{step['id']}",
            json={"completed": True},
            headers=headers,
        )
        assert resp.status_code == 200

    body = resp.json()
    assert body["progress"] == 38
    assert body["completed"] is False
    assert [s["completed"] for s in body["steps"]][:4] == [True, True, True, False]


def test_toggle_all_steps_completes_without_points(
    client: TestClient, headers: dict
) -> None:
    roadmap = _create(client, headers)
    for step in roadmap["steps"]:
        resp = client.patch(
            f"/api/roadmaps/{roadmap['id']}/steps/{step['id']}",
            json={"completed": True},
            headers=headers,
        )
    body = resp.json()
    assert body["progress"] == 100
    assert body["completed"] is True
    assert body["completed_at"] is not None
    assert client.get("/api/user", headers=headers).json()["points"] == 0


@pytest.mark.parametrize("payload", [{"completed": "true"}, {"completed": 1}, {}])
def test_toggle_rejects_non_boolean(
    client: TestClient, headers: dict, payload: dict
) -> None:
    roadmap = _create(client, headers)
    step_id = roadmap["steps"][0]["id"]
    resp = client.patch(
        f"/api/roadmaps/{roadmap['id']}/steps/{step_id}", json=payload, headers=headers
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid completed value"


def test_toggle_unknown_step(client: TestClient, headers: dict) -> None:
    roadmap = _create(client, headers)
    resp = client.patch(
        f"/api/roadmaps/{roadmap['id']}/steps/missing",
        json={"completed": True},
        headers=headers,
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Roadmap or step not found"


def test_toggle_unknown_roadmap(client: TestClient, headers: dict) -> None:
    resp = client.patch(
        f"/api/roadmaps/{uuid4()}/steps/x", json={"completed": True}, headers=headers
    )
    assert resp.status_code == 404


def test_toggle_requires_token(client: TestClient, headers: dict) -> None:
    roadmap = _create(client, headers)
    step_id = roadmap["steps"][0]["id"]
    resp = client.patch(
        f"/api/roadmaps/{roadmap['id']}/steps/{step_id}", json={"completed": True}
    )
    assert resp.status_code == 401


# ---- completion ----


def test_complete_awards_weighted_points(client: TestClient, headers: dict) -> None:
    # The web-development template references 16 seeded resources whose
    # weights average 1.25.
    roadmap = _create(client, headers)
    resp = client.post(f"/api/roadmaps/{roadmap['id']}/complete", headers=headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["completed"] is True
    assert body["progress"] == 100
    assert all(not s["completed"] for s in body["steps"])

    assert client.get("/api/user", headers=headers).json()["points"] == 125
    completions = client.get("/api/user/completions", headers=headers).json()
    assert [c["points_earned"] for c in completions] == [125]
    assert completions[0]["roadmap_id"] == roadmap["id"]


def test_complete_twice_awards_twice(client: TestClient, headers: dict) -> None:
    roadmap = _create(client, headers)
    client.post(f"/api/roadmaps/{roadmap['id']}/complete", headers=headers)
    client.post(f"/api/roadmaps/{roadmap['id']}/complete", headers=headers)
    assert client.get("/api/user", headers=headers).json()["points"] == 250
    assert len(client.get("/api/user/completions", headers=headers).json()) == 2


def test_uncheck_after_completion_keeps_points(
    client: TestClient, headers: dict
) -> None:
    roadmap = _create(client, headers)
    client.post(f"/api/roadmaps/{roadmap['id']}/complete", headers=headers)
    step_id = roadmap["steps"][0]["id"]

    # Step flags were untouched by completion; toggling recomputes progress.
    resp = client.patch(
        f"/api/roadmaps/{roadmap['id']}/steps/{step_id}",
        json={"completed": False},
        headers=headers,
    )
    body = resp.json()
    assert body["completed"] is False
    assert body["completed_at"] is None
    assert body["progress"] == 0
    assert client.get("/api/user", headers=headers).json()["points"] == 125


def test_complete_someone_elses_roadmap_credits_caller(
    client: TestClient, headers: dict
) -> None:
    roadmap = _create(client, headers)
    other = create_test_user("mallory")
    other_headers = auth_headers(other)

    resp = client.post(f"/api/roadmaps/{roadmap['id']}/complete", headers=other_headers)

    assert resp.status_code == 200
    assert client.get("/api/user", headers=other_headers).json()["points"] == 125
    assert client.get("/api/user", headers=headers).json()["points"] == 0


def test_complete_unknown_roadmap(client: TestClient, headers: dict) -> None:
    resp = client.post(f"/api/roadmaps/{uuid4()}/complete", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Roadmap not found"


def test_complete_with_token_for_missing_account(
    client: TestClient, headers: dict
) -> None:
    roadmap = _create(client, headers)
    ghost_headers = {"Authorization": f"Bearer {mint_token(user_id=str(uuid4()))}"}

    resp = client.post(f"/api/roadmaps/{roadmap['id']}/complete", headers=ghost_headers)

    assert resp.status_code == 404
    assert resp.json()["detail"] == "User not found"
    stored = client.get(f"/api/roadmaps/{roadmap['id']}").json()
    assert stored["completed"] is False
    assert stored["progress"] == 0


def test_complete_requires_token(client: TestClient, headers: dict) -> None:
    roadmap = _create(client, headers)
    assert client.post(f"/api/roadmaps/{roadmap['id']}/complete").status_code == 401
