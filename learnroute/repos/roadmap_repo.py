from __future__ import annotations

from typing import Protocol
from uuid import UUID

from learnroute.models.roadmap import Roadmap


class RoadmapRepo(Protocol):
    async def get(self, roadmap_id: UUID) -> Roadmap | None: ...
    async def list_by_user(self, user_id: UUID) -> list[Roadmap]: ...
    async def add(self, roadmap: Roadmap) -> None: ...
    async def replace(self, roadmap: Roadmap) -> Roadmap | None: ...


class InMemoryRoadmapRepo:
    def __init__(self) -> None:
        self._by_id: dict[UUID, Roadmap] = {}

    async def get(self, roadmap_id: UUID) -> Roadmap | None:
        return self._by_id.get(roadmap_id)

    async def list_by_user(self, user_id: UUID) -> list[Roadmap]:
        return [r for r in self._by_id.values() if r.user_id == user_id]

    async def add(self, roadmap: Roadmap) -> None:
        if roadmap.id in self._by_id:
            raise ValueError("roadmap already exists")
        self._by_id[roadmap.id] = roadmap

    async def replace(self, roadmap: Roadmap) -> Roadmap | None:
        """Whole-record write. Returns None if the roadmap no longer exists."""
        if roadmap.id not in self._by_id:
            return None
        self._by_id[roadmap.id] = roadmap
        return roadmap
