from __future__ import annotations

import threading
from dataclasses import replace
from typing import Protocol
from uuid import UUID

from learnroute.models.user import User

# Columns a user may change through the profile endpoints.
PROFILE_FIELDS = frozenset({"full_name", "bio", "profile_image", "theme_preference"})


class UserRepo(Protocol):
    async def get_by_id(self, user_id: UUID) -> User | None: ...
    async def get_by_username(self, username: str) -> User | None: ...
    async def add(self, user: User) -> None: ...
    async def update_profile(
        self, user_id: UUID, changes: dict[str, str | None]
    ) -> User | None: ...
    async def add_points(self, user_id: UUID, points: int) -> User | None: ...
    async def top_by_points(self, limit: int) -> list[User]: ...


class InMemoryUserRepo:
    def __init__(self) -> None:
        self._by_id: dict[UUID, User] = {}
        self._by_username: dict[str, User] = {}
        self._lock = threading.Lock()

    async def get_by_id(self, user_id: UUID) -> User | None:
        return self._by_id.get(user_id)

    async def get_by_username(self, username: str) -> User | None:
        return self._by_username.get(username)

    async def add(self, user: User) -> None:
        with self._lock:
            if user.username in self._by_username:
                raise ValueError("username already exists")
            self._store(user)

    async def update_profile(
        self, user_id: UUID, changes: dict[str, str | None]
    ) -> User | None:
        unknown = set(changes) - PROFILE_FIELDS
        if unknown:
            raise ValueError(f"not a profile field: {sorted(unknown)}")
        with self._lock:
            u = self._by_id.get(user_id)
            if u is None:
                return None
            updated = replace(u, **changes)
            self._store(updated)
            return updated

    async def add_points(self, user_id: UUID, points: int) -> User | None:
        # Read and write under one lock: the in-memory analogue of
        # UPDATE ... SET points = points + :n.
        with self._lock:
            u = self._by_id.get(user_id)
            if u is None:
                return None
            updated = replace(u, points=u.points + points)
            self._store(updated)
            return updated

    async def top_by_points(self, limit: int) -> list[User]:
        users = sorted(self._by_id.values(), key=lambda u: u.points, reverse=True)
        return users[:limit]

    def _store(self, user: User) -> None:
        self._by_id[user.id] = user
        self._by_username[user.username] = user
