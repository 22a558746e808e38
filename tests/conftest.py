from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from learnroute.main import app
from learnroute.models.user import User
from learnroute.repos.registry import memory_repos
from learnroute.services import auth_service, token_service
from learnroute.services.cache import cache_service
from learnroute.services.resource_service import seed_resources_if_empty

# Ensure repo root is on sys.path so `import learnroute` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def reset_repos() -> None:
    """Empty the in-memory store and reseed the resource catalog."""
    memory_repos.users._by_id.clear()  # type: ignore[attr-defined]
    memory_repos.users._by_username.clear()  # type: ignore[attr-defined]
    memory_repos.roadmaps._by_id.clear()  # type: ignore[attr-defined]
    memory_repos.resources._by_id.clear()  # type: ignore[attr-defined]
    memory_repos.resources._next_id = 1  # type: ignore[attr-defined]
    memory_repos.completions._entries.clear()  # type: ignore[attr-defined]
    asyncio.run(seed_resources_if_empty(memory_repos.resources))


@pytest.fixture(autouse=True)
def reset_cache() -> None:
    """Clear cache between tests."""
    if hasattr(cache_service, "_store"):
        cache_service._store.clear()  # type: ignore[union-attr]


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def mint_token(
    user_id: str = "test-user",
    roles: list[str] | None = None,
) -> str:
    """Create a valid ES256 JWT for testing."""
    return token_service.create_access_token(sub=user_id, roles=roles)


def create_test_user(
    username: str | None = None, *, role: str = "user", points: int = 0
) -> User:
    """Persist a user in the in-memory repo (password: TEST_PASSWORD)."""
    user = User.new(
        username=username or f"user-{uuid4().hex[:8]}",
        email="learner@example.com",
        password_hash=auth_service.hash_password(TEST_PASSWORD),
        role=role,
    )
    asyncio.run(memory_repos.users.add(user))
    if points:
        user = asyncio.run(memory_repos.users.add_points(user.id, points))
    return user


def auth_headers(user: User) -> dict[str, str]:
    token = mint_token(user_id=str(user.id), roles=[user.role])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user() -> User:
    return create_test_user("ada")


@pytest.fixture
def headers(user: User) -> dict[str, str]:
    return auth_headers(user)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return auth_headers(create_test_user("admin", role="admin"))
