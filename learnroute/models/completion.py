from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class CourseCompletion:
    """Append-only ledger entry: one per explicit roadmap completion."""

    id: UUID
    user_id: UUID
    roadmap_id: UUID
    points_earned: int
    completed_at: datetime
    feedback: str | None = None

    @staticmethod
    def new(
        *,
        user_id: UUID,
        roadmap_id: UUID,
        points_earned: int,
        completed_at: datetime | None = None,
        feedback: str | None = None,
    ) -> CourseCompletion:
        return CourseCompletion(
            id=uuid4(),
            user_id=user_id,
            roadmap_id=roadmap_id,
            points_earned=points_earned,
            completed_at=completed_at or datetime.now(UTC),
            feedback=feedback,
        )
