"""PostgreSQL implementation of CompletionRepo."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from learnroute.db.tables import CourseCompletionRow
from learnroute.models.completion import CourseCompletion


class PgCompletionRepo:
    """Satisfies the CompletionRepo Protocol using PostgreSQL."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, completion: CourseCompletion) -> None:
        row = CourseCompletionRow(
            id=completion.id,
            user_id=completion.user_id,
            roadmap_id=completion.roadmap_id,
            points_earned=completion.points_earned,
            completed_at=completion.completed_at,
            feedback=completion.feedback,
        )
        self._session.add(row)
        await self._session.flush()

    async def list_by_user(self, user_id: UUID) -> list[CourseCompletion]:
        stmt = (
            select(CourseCompletionRow)
            .where(CourseCompletionRow.user_id == user_id)
            .order_by(CourseCompletionRow.completed_at)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_completion(r) for r in rows]

    async def total_points(self, user_id: UUID) -> int:
        stmt = select(
            func.coalesce(func.sum(CourseCompletionRow.points_earned), 0)
        ).where(CourseCompletionRow.user_id == user_id)
        return int((await self._session.execute(stmt)).scalar_one())


def _row_to_completion(row: CourseCompletionRow) -> CourseCompletion:
    return CourseCompletion(
        id=row.id,
        user_id=row.user_id,
        roadmap_id=row.roadmap_id,
        points_earned=row.points_earned,
        completed_at=row.completed_at,
        feedback=row.feedback,
    )
