"""Account endpoints: register, login and the caller's own profile.

POST  /api/register     create an account, returns a bearer token
POST  /api/login        exchange username/password for a bearer token
GET   /api/user         the caller's profile
PATCH /api/user         edit profile fields
POST  /api/user/theme   switch dark|light
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from learnroute.api.dependencies import CurrentPrincipal, RequestRepos, principal_uuid
from learnroute.api.schemas import UserOut
from learnroute.models.user import User
from learnroute.services import auth_service, token_service, users_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


class RegisterIn(BaseModel):
    username: str
    password: str
    email: str
    full_name: str | None = None
    bio: str | None = None


class LoginIn(BaseModel):
    username: str
    password: str


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class ProfileUpdateIn(BaseModel):
    full_name: str | None = None
    bio: str | None = None
    profile_image: str | None = None


class ThemeIn(BaseModel):
    theme: str


def _issue_token(user: User) -> TokenOut:
    access_token = token_service.create_access_token(
        sub=str(user.id), roles=[user.role]
    )
    return TokenOut(access_token=access_token, user=UserOut.from_user(user))


@router.post(
    "/register", response_model=TokenOut, status_code=status.HTTP_201_CREATED
)
async def register(payload: RegisterIn, repos: RequestRepos) -> TokenOut:
    try:
        user = await users_service.register_user(
            repos.users,
            username=payload.username,
            password=payload.password,
            email=payload.email,
            full_name=payload.full_name,
            bio=payload.bio,
        )
    except users_service.UserValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=str(e)
        ) from None
    except users_service.UsernameTakenError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Username already exists"
        ) from None

    return _issue_token(user)


@router.post("/login", response_model=TokenOut)
async def login(payload: LoginIn, repos: RequestRepos) -> TokenOut:
    username = payload.username.strip()
    user = await auth_service.authenticate_user(
        repos.users, username, payload.password
    )
    if user is None:
        logger.warning("Login failed  username=%s", username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info("Login succeeded  user_id=%s username=%s", user.id, username)
    return _issue_token(user)


@router.get("/user", response_model=UserOut)
async def get_me(principal: CurrentPrincipal, repos: RequestRepos) -> UserOut:
    user = await repos.users.get_by_id(principal_uuid(principal))
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserOut.from_user(user)


@router.patch("/user", response_model=UserOut)
async def update_me(
    body: ProfileUpdateIn, principal: CurrentPrincipal, repos: RequestRepos
) -> UserOut:
    try:
        user = await users_service.update_profile(
            repos.users,
            principal_uuid(principal),
            full_name=body.full_name,
            bio=body.bio,
            profile_image=body.profile_image,
        )
    except users_service.UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found") from None
    repos.invalidate_after_commit(users_service.LEADERBOARD_CACHE_PATTERN)
    return UserOut.from_user(user)


@router.post("/user/theme", response_model=UserOut)
async def update_theme(
    body: ThemeIn, principal: CurrentPrincipal, repos: RequestRepos
) -> UserOut:
    try:
        user = await users_service.set_theme(
            repos.users, principal_uuid(principal), body.theme
        )
    except users_service.UserValidationError:
        raise HTTPException(status_code=400, detail="Invalid theme") from None
    except users_service.UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found") from None
    return UserOut.from_user(user)
