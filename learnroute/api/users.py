"""Public user data and points.

GET /api/users/{user_id}     public profile
GET /api/user/completions    the caller's completion ledger
GET /api/leaderboard         top users by points (cached)
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from learnroute.api.dependencies import CurrentPrincipal, RequestRepos, principal_uuid
from learnroute.api.schemas import CompletionOut, PublicUserOut
from learnroute.services import users_service

router = APIRouter(prefix="/api", tags=["users"])


class LeaderboardEntryOut(BaseModel):
    id: str
    username: str
    full_name: str | None
    profile_image: str | None
    points: int


@router.get("/users/{user_id}", response_model=PublicUserOut)
async def get_user(user_id: str, repos: RequestRepos) -> PublicUserOut:
    try:
        uid = UUID(user_id)
    except ValueError:
        raise HTTPException(status_code=404, detail="User not found") from None
    user = await repos.users.get_by_id(uid)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return PublicUserOut.from_user(user)


@router.get("/user/completions", response_model=list[CompletionOut])
async def list_my_completions(
    principal: CurrentPrincipal, repos: RequestRepos
) -> list[CompletionOut]:
    completions = await repos.completions.list_by_user(principal_uuid(principal))
    return [CompletionOut.from_completion(c) for c in completions]


@router.get("/leaderboard", response_model=list[LeaderboardEntryOut])
async def get_leaderboard(
    repos: RequestRepos,
    limit: Annotated[int, Query(ge=1, le=users_service.MAX_LEADERBOARD_LIMIT)] = 10,
) -> list[LeaderboardEntryOut]:
    entries = await users_service.leaderboard(repos.users, limit)
    return [
        LeaderboardEntryOut(
            id=e.id,
            username=e.username,
            full_name=e.full_name,
            profile_image=e.profile_image,
            points=e.points,
        )
        for e in entries
    ]
