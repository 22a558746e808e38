from __future__ import annotations

import asyncio

import pytest

from learnroute.repos.user_repo import InMemoryUserRepo
from learnroute.services import users_service
from learnroute.services.auth_service import verify_password
from learnroute.services.cache import cache_service
from learnroute.services.users_service import (
    UsernameTakenError,
    UserValidationError,
    leaderboard,
    register_user,
    set_theme,
    update_profile,
)


def _register(repo: InMemoryUserRepo, username: str = "linus", **overrides):
    fields = {
        "username": username,
        "password": "long-enough-pw",
        "email": "Linus@Example.com",
    }
    fields.update(overrides)
    return asyncio.run(register_user(repo, **fields))


def test_register_defaults() -> None:
    repo = InMemoryUserRepo()
    user = _register(repo)
    assert user.points == 0
    assert user.theme_preference == "dark"
    assert user.role == "user"
    assert user.email == "linus@example.com"
    assert verify_password("long-enough-pw", user.password_hash)


def test_register_duplicate_username() -> None:
    repo = InMemoryUserRepo()
    _register(repo)
    with pytest.raises(UsernameTakenError):
        _register(repo)


@pytest.mark.parametrize(
    "overrides",
    [
        {"username": "   "},
        {"password": "short"},
        {"email": "not-an-email"},
    ],
)
def test_register_validation(overrides: dict) -> None:
    with pytest.raises(UserValidationError):
        _register(InMemoryUserRepo(), **overrides)


def test_update_profile_ignores_unset_fields() -> None:
    repo = InMemoryUserRepo()
    user = _register(repo, full_name="Linus T", bio="kernel")
    updated = asyncio.run(update_profile(repo, user.id, bio="git"))
    assert updated.bio == "git"
    assert updated.full_name == "Linus T"


def test_set_theme() -> None:
    repo = InMemoryUserRepo()
    user = _register(repo)
    assert asyncio.run(set_theme(repo, user.id, "light")).theme_preference == "light"
    with pytest.raises(UserValidationError):
        asyncio.run(set_theme(repo, user.id, "solarized"))


def test_leaderboard_orders_by_points_and_caches() -> None:
    repo = InMemoryUserRepo()
    low = _register(repo, "low")
    high = _register(repo, "high")
    asyncio.run(repo.add_points(low.id, 100))
    asyncio.run(repo.add_points(high.id, 250))

    board = asyncio.run(leaderboard(repo, 10))
    assert [(e.username, e.points) for e in board] == [("high", 250), ("low", 100)]

    # Cached: a new credit is invisible until invalidation.
    asyncio.run(repo.add_points(low.id, 500))
    assert asyncio.run(leaderboard(repo, 10))[0].username == "high"

    asyncio.run(cache_service.delete_pattern(users_service.LEADERBOARD_CACHE_PATTERN))
    assert asyncio.run(leaderboard(repo, 10))[0].username == "low"


def test_leaderboard_respects_limit() -> None:
    repo = InMemoryUserRepo()
    for i in range(3):
        _register(repo, f"user{i}")
    assert len(asyncio.run(leaderboard(repo, 2))) == 2
