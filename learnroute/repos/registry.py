"""Repository bundles handed to services.

``memory_repos`` is the process-wide in-memory store used when no
DATABASE_URL is configured (dev, tests).  ``pg_repos`` binds the
PostgreSQL implementations to one request-scoped session so every write
of a request commits or rolls back together.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from learnroute.repos.completion_repo import CompletionRepo, InMemoryCompletionRepo
from learnroute.repos.pg_completion_repo import PgCompletionRepo
from learnroute.repos.pg_resource_repo import PgResourceRepo
from learnroute.repos.pg_roadmap_repo import PgRoadmapRepo
from learnroute.repos.pg_user_repo import PgUserRepo
from learnroute.repos.resource_repo import InMemoryResourceRepo, ResourceRepo
from learnroute.repos.roadmap_repo import InMemoryRoadmapRepo, RoadmapRepo
from learnroute.repos.user_repo import InMemoryUserRepo, UserRepo


@dataclass(frozen=True)
class Repos:
    users: UserRepo
    roadmaps: RoadmapRepo
    resources: ResourceRepo
    completions: CompletionRepo
    # Cache key patterns to clear once this request's writes are committed.
    invalidations: list[str] = field(default_factory=list)

    def invalidate_after_commit(self, pattern: str) -> None:
        if pattern not in self.invalidations:
            self.invalidations.append(pattern)


def new_memory_repos() -> Repos:
    return Repos(
        users=InMemoryUserRepo(),
        roadmaps=InMemoryRoadmapRepo(),
        resources=InMemoryResourceRepo(),
        completions=InMemoryCompletionRepo(),
    )


def pg_repos(session: AsyncSession) -> Repos:
    return Repos(
        users=PgUserRepo(session),
        roadmaps=PgRoadmapRepo(session),
        resources=PgResourceRepo(session),
        completions=PgCompletionRepo(session),
    )


memory_repos = new_memory_repos()
