from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class RoadmapStep:
    id: str
    title: str
    description: str
    resource_ids: tuple[int, ...] = ()  # ordered, duplicates allowed
    completed: bool = False


@dataclass(frozen=True, slots=True)
class Roadmap:
    """A user's instance of a category step sequence.

    ``steps`` has a fixed length after creation; only each step's
    ``completed`` flag changes.  ``progress`` and ``completed`` are derived
    and cached on the record.
    """

    id: UUID
    user_id: UUID
    title: str
    category: str
    steps: tuple[RoadmapStep, ...]
    description: str | None = None
    progress: int = 0
    completed: bool = False
    completed_at: datetime | None = None
    created_at: datetime | None = None

    @staticmethod
    def new(
        *,
        user_id: UUID,
        title: str,
        category: str,
        steps: tuple[RoadmapStep, ...],
        description: str | None = None,
    ) -> Roadmap:
        return Roadmap(
            id=uuid4(),
            user_id=user_id,
            title=title,
            category=category,
            steps=steps,
            description=description,
            created_at=datetime.now(UTC),
        )
