from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from learnroute.models.resource import Resource, ResourceDraft


class ResourceRepo(Protocol):
    async def get(self, resource_id: int) -> Resource | None: ...
    async def get_many(self, ids: Iterable[int]) -> list[Resource]: ...
    async def list_all(self) -> list[Resource]: ...
    async def list_by_category(self, category: str) -> list[Resource]: ...
    async def create(self, draft: ResourceDraft) -> Resource: ...
    async def count(self) -> int: ...


class InMemoryResourceRepo:
    def __init__(self) -> None:
        self._by_id: dict[int, Resource] = {}
        self._next_id = 1

    async def get(self, resource_id: int) -> Resource | None:
        return self._by_id.get(resource_id)

    async def get_many(self, ids: Iterable[int]) -> list[Resource]:
        """One record per distinct id that exists, in catalog order."""
        wanted = set(ids)
        return [r for rid, r in sorted(self._by_id.items()) if rid in wanted]

    async def list_all(self) -> list[Resource]:
        return [r for _, r in sorted(self._by_id.items())]

    async def list_by_category(self, category: str) -> list[Resource]:
        return [r for r in await self.list_all() if r.category == category]

    async def create(self, draft: ResourceDraft) -> Resource:
        resource = draft.with_id(self._next_id)
        self._by_id[resource.id] = resource
        self._next_id += 1
        return resource

    async def count(self) -> int:
        return len(self._by_id)
