from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass
from uuid import UUID

from learnroute.core.config import SETTINGS
from learnroute.models.user import THEMES, User
from learnroute.repos.user_repo import UserRepo
from learnroute.services import auth_service
from learnroute.services.cache import cache_service

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 8
MAX_LEADERBOARD_LIMIT = 100
LEADERBOARD_CACHE_PATTERN = "leaderboard:*"


class UserValidationError(ValueError):
    pass


class UsernameTakenError(Exception):
    pass


class UserNotFoundError(LookupError):
    pass


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    id: str
    username: str
    full_name: str | None
    profile_image: str | None
    points: int


async def register_user(
    repo: UserRepo,
    *,
    username: str,
    password: str,
    email: str,
    full_name: str | None = None,
    bio: str | None = None,
) -> User:
    username = username.strip()
    email = email.strip().lower()

    if not username:
        logger.warning("Rejected blank username")
        raise UserValidationError("username must be non-empty")
    if not _EMAIL_RE.match(email):
        raise UserValidationError("invalid email address")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise UserValidationError(
            f"password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    if await repo.get_by_username(username) is not None:
        logger.warning("Rejected duplicate username=%s", username)
        raise UsernameTakenError(username)

    user = User.new(
        username=username,
        email=email,
        password_hash=auth_service.hash_password(password),
        full_name=full_name,
        bio=bio,
    )
    try:
        await repo.add(user)
    except ValueError:
        # Lost a race with a concurrent registration of the same name.
        raise UsernameTakenError(username) from None

    logger.info("User registered  user_id=%s username=%s", user.id, username)
    return user


async def update_profile(
    repo: UserRepo,
    user_id: UUID,
    *,
    full_name: str | None = None,
    bio: str | None = None,
    profile_image: str | None = None,
) -> User:
    """Apply the provided (non-None) profile fields."""
    changes = {
        k: v
        for k, v in (
            ("full_name", full_name),
            ("bio", bio),
            ("profile_image", profile_image),
        )
        if v is not None
    }
    updated = await repo.update_profile(user_id, changes)
    if updated is None:
        raise UserNotFoundError(str(user_id))
    return updated


async def set_theme(repo: UserRepo, user_id: UUID, theme: str) -> User:
    if theme not in THEMES:
        raise UserValidationError("theme must be dark|light")
    updated = await repo.update_profile(user_id, {"theme_preference": theme})
    if updated is None:
        raise UserNotFoundError(str(user_id))
    return updated


async def leaderboard(repo: UserRepo, limit: int = 10) -> list[LeaderboardEntry]:
    """Top users by points, read through the cache."""
    limit = max(1, min(limit, MAX_LEADERBOARD_LIMIT))
    cache_key = f"leaderboard:{limit}"

    cached = await cache_service.get(cache_key)
    if cached is not None:
        return [LeaderboardEntry(**e) for e in json.loads(cached)]

    entries = [
        LeaderboardEntry(
            id=str(u.id),
            username=u.username,
            full_name=u.full_name,
            profile_image=u.profile_image,
            points=u.points,
        )
        for u in await repo.top_by_points(limit)
    ]
    await cache_service.set(
        cache_key,
        json.dumps([asdict(e) for e in entries]),
        SETTINGS.leaderboard_cache_ttl,
    )
    return entries

