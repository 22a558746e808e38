from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from uuid import uuid4

import pytest

from learnroute.models.roadmap import Roadmap, RoadmapStep
from learnroute.models.user import User
from learnroute.repos.roadmap_repo import InMemoryRoadmapRepo
from learnroute.repos.user_repo import InMemoryUserRepo


def _user(username: str = "kay") -> User:
    return User.new(username=username, email="k@example.com", password_hash="x")


def test_duplicate_username_rejected() -> None:
    repo = InMemoryUserRepo()
    asyncio.run(repo.add(_user()))
    with pytest.raises(ValueError):
        asyncio.run(repo.add(_user()))


def test_update_profile_rejects_non_profile_fields() -> None:
    repo = InMemoryUserRepo()
    user = _user()
    asyncio.run(repo.add(user))
    with pytest.raises(ValueError):
        asyncio.run(repo.update_profile(user.id, {"points": "999"}))


def test_add_points_is_atomic_under_threads() -> None:
    repo = InMemoryUserRepo()
    user = _user()
    asyncio.run(repo.add(user))

    def credit() -> None:
        asyncio.run(repo.add_points(user.id, 5))

    with ThreadPoolExecutor(max_workers=8) as pool:
        for _ in range(200):
            pool.submit(credit)

    assert asyncio.run(repo.get_by_id(user.id)).points == 1000


def test_add_points_unknown_user() -> None:
    assert asyncio.run(InMemoryUserRepo().add_points(uuid4(), 10)) is None


def test_replace_missing_roadmap_returns_none() -> None:
    roadmap = Roadmap.new(user_id=uuid4(), title="t", category="devops", steps=())
    assert asyncio.run(InMemoryRoadmapRepo().replace(roadmap)) is None


def test_replace_stores_new_record() -> None:
    repo = InMemoryRoadmapRepo()
    step = RoadmapStep(id="a", title="A", description="")
    roadmap = Roadmap.new(user_id=uuid4(), title="t", category="devops", steps=(step,))
    asyncio.run(repo.add(roadmap))

    updated = replace(roadmap, progress=100, completed=True)
    assert asyncio.run(repo.replace(updated)) == updated
    assert asyncio.run(repo.get(roadmap.id)).completed is True
