from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID, uuid4

THEMES = ("dark", "light")


@dataclass(frozen=True, slots=True)
class User:
    id: UUID
    username: str
    email: str
    password_hash: str
    full_name: str | None = None
    bio: str | None = None
    profile_image: str | None = None
    points: int = 0  # cached aggregate of CourseCompletion.points_earned
    theme_preference: str = "dark"  # dark|light
    current_skills: tuple[str, ...] = ()
    learning_goals: tuple[str, ...] = ()
    role: str = "user"  # user|admin
    created_at: datetime | None = None

    @staticmethod
    def new(
        *,
        username: str,
        email: str,
        password_hash: str,
        full_name: str | None = None,
        bio: str | None = None,
        role: str = "user",
    ) -> User:
        return User(
            id=uuid4(),
            username=username,
            email=email,
            password_hash=password_hash,
            full_name=full_name,
            bio=bio,
            role=role,
            created_at=datetime.now(UTC),
        )
