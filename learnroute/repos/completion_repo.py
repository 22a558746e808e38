from __future__ import annotations

from typing import Protocol
from uuid import UUID

from learnroute.models.completion import CourseCompletion


class CompletionRepo(Protocol):
    """Append-only ledger of explicit roadmap completions."""

    async def add(self, completion: CourseCompletion) -> None: ...
    async def list_by_user(self, user_id: UUID) -> list[CourseCompletion]: ...
    async def total_points(self, user_id: UUID) -> int: ...


class InMemoryCompletionRepo:
    def __init__(self) -> None:
        self._entries: list[CourseCompletion] = []

    async def add(self, completion: CourseCompletion) -> None:
        self._entries.append(completion)

    async def list_by_user(self, user_id: UUID) -> list[CourseCompletion]:
        return [c for c in self._entries if c.user_id == user_id]

    async def total_points(self, user_id: UUID) -> int:
        return sum(c.points_earned for c in self._entries if c.user_id == user_id)
