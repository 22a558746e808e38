"""PostgreSQL implementation of UserRepo."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from learnroute.db.tables import UserRow
from learnroute.models.user import User
from learnroute.repos.user_repo import PROFILE_FIELDS


class PgUserRepo:
    """Satisfies the UserRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: UUID) -> User | None:
        stmt = select(UserRow).where(UserRow.id == user_id)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_user(row)

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(UserRow).where(UserRow.username == username)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_user(row)

    async def add(self, user: User) -> None:
        row = UserRow(
            id=user.id,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            full_name=user.full_name,
            bio=user.bio,
            profile_image=user.profile_image,
            points=user.points,
            theme_preference=user.theme_preference,
            current_skills=list(user.current_skills),
            learning_goals=list(user.learning_goals),
            role=user.role,
        )
        if user.created_at is not None:
            row.created_at = user.created_at
        try:
            async with self._session.begin_nested():
                self._session.add(row)
        except IntegrityError:
            raise ValueError("username already exists") from None

    async def update_profile(
        self, user_id: UUID, changes: dict[str, str | None]
    ) -> User | None:
        unknown = set(changes) - PROFILE_FIELDS
        if unknown:
            raise ValueError(f"not a profile field: {sorted(unknown)}")
        if not changes:
            return await self.get_by_id(user_id)
        stmt = (
            update(UserRow)
            .where(UserRow.id == user_id)
            .values(**changes)
            .returning(UserRow)
            .execution_options(populate_existing=True)
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_user(row)

    async def add_points(self, user_id: UUID, points: int) -> User | None:
        # Single-statement increment: concurrent credits cannot overwrite
        # each other the way a read-then-write would.
        stmt = (
            update(UserRow)
            .where(UserRow.id == user_id)
            .values(points=UserRow.points + points)
            .returning(UserRow)
            .execution_options(populate_existing=True)
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_user(row)

    async def top_by_points(self, limit: int) -> list[User]:
        stmt = select(UserRow).order_by(UserRow.points.desc()).limit(limit)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_user(r) for r in rows]


def _row_to_user(row: UserRow) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        full_name=row.full_name,
        bio=row.bio,
        profile_image=row.profile_image,
        points=row.points,
        theme_preference=row.theme_preference or "dark",
        current_skills=tuple(row.current_skills) if row.current_skills else (),
        learning_goals=tuple(row.learning_goals) if row.learning_goals else (),
        role=row.role or "user",
        created_at=row.created_at,
    )
