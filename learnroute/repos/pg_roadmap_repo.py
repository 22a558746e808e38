"""PostgreSQL implementation of RoadmapRepo."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from learnroute.db.tables import RoadmapRow
from learnroute.models.roadmap import Roadmap, RoadmapStep


class PgRoadmapRepo:
    """Satisfies the RoadmapRepo Protocol using PostgreSQL."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, roadmap_id: UUID) -> Roadmap | None:
        stmt = select(RoadmapRow).where(RoadmapRow.id == roadmap_id)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_roadmap(row)

    async def list_by_user(self, user_id: UUID) -> list[Roadmap]:
        stmt = (
            select(RoadmapRow)
            .where(RoadmapRow.user_id == user_id)
            .order_by(RoadmapRow.created_at)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_roadmap(r) for r in rows]

    async def add(self, roadmap: Roadmap) -> None:
        row = RoadmapRow(
            id=roadmap.id,
            user_id=roadmap.user_id,
            title=roadmap.title,
            description=roadmap.description,
            category=roadmap.category,
            progress=roadmap.progress,
            steps=[_step_to_json(s) for s in roadmap.steps],
            completed=roadmap.completed,
            completed_at=roadmap.completed_at,
        )
        if roadmap.created_at is not None:
            row.created_at = roadmap.created_at
        self._session.add(row)
        await self._session.flush()

    async def replace(self, roadmap: Roadmap) -> Roadmap | None:
        # The steps blob is rewritten in full together with the derived
        # columns; id, owner and category are never updated.
        stmt = (
            update(RoadmapRow)
            .where(RoadmapRow.id == roadmap.id)
            .values(
                steps=[_step_to_json(s) for s in roadmap.steps],
                progress=roadmap.progress,
                completed=roadmap.completed,
                completed_at=roadmap.completed_at,
            )
            .returning(RoadmapRow)
            .execution_options(populate_existing=True)
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_roadmap(row)


def _step_to_json(step: RoadmapStep) -> dict:
    return {
        "id": step.id,
        "title": step.title,
        "description": step.description,
        "resourceIds": list(step.resource_ids),
        "completed": step.completed,
    }


def _json_to_step(data: dict) -> RoadmapStep:
    return RoadmapStep(
        id=str(data["id"]),
        title=data.get("title", ""),
        description=data.get("description", ""),
        resource_ids=tuple(int(r) for r in data.get("resourceIds") or ()),
        completed=bool(data.get("completed", False)),
    )


def _row_to_roadmap(row: RoadmapRow) -> Roadmap:
    return Roadmap(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        description=row.description,
        category=row.category,
        steps=tuple(_json_to_step(s) for s in row.steps or ()),
        progress=row.progress,
        completed=row.completed,
        completed_at=row.completed_at,
        created_at=row.created_at,
    )
