"""PostgreSQL implementation of ResourceRepo."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from learnroute.db.tables import ResourceRow
from learnroute.models.resource import Resource, ResourceDraft


class PgResourceRepo:
    """Satisfies the ResourceRepo Protocol using PostgreSQL."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, resource_id: int) -> Resource | None:
        row = await self._session.get(ResourceRow, resource_id)
        if row is None:
            return None
        return _row_to_resource(row)

    async def get_many(self, ids: Iterable[int]) -> list[Resource]:
        wanted = sorted(set(ids))
        if not wanted:
            return []
        stmt = (
            select(ResourceRow)
            .where(ResourceRow.id.in_(wanted))
            .order_by(ResourceRow.id)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_resource(r) for r in rows]

    async def list_all(self) -> list[Resource]:
        stmt = select(ResourceRow).order_by(ResourceRow.id)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_resource(r) for r in rows]

    async def list_by_category(self, category: str) -> list[Resource]:
        stmt = (
            select(ResourceRow)
            .where(ResourceRow.category == category)
            .order_by(ResourceRow.id)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_resource(r) for r in rows]

    async def create(self, draft: ResourceDraft) -> Resource:
        row = ResourceRow(
            title=draft.title,
            type=draft.type,
            url=draft.url,
            category=draft.category,
            description=draft.description,
            thumbnail=draft.thumbnail,
            duration=draft.duration,
            difficulty=draft.difficulty,
            points_value=draft.points_value,
        )
        self._session.add(row)
        await self._session.flush()
        return _row_to_resource(row)

    async def count(self) -> int:
        stmt = select(func.count()).select_from(ResourceRow)
        return (await self._session.execute(stmt)).scalar_one()


def _row_to_resource(row: ResourceRow) -> Resource:
    return Resource(
        id=row.id,
        title=row.title,
        type=row.type,
        url=row.url,
        category=row.category,
        description=row.description,
        thumbnail=row.thumbnail,
        duration=row.duration,
        difficulty=row.difficulty,
        points_value=row.points_value,
    )
