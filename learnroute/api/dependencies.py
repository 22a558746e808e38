from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from dataclasses import replace
from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from learnroute.db import engine as db_engine
from learnroute.models.principal import Principal
from learnroute.repos.registry import Repos, memory_repos, pg_repos
from learnroute.services import token_service
from learnroute.services.cache import cache_service

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login")


async def get_repos() -> AsyncGenerator[Repos, None]:
    """Repository bundle for one request.

    PostgreSQL-backed repos share a single session: everything the request
    writes commits together or rolls back together.  Cache patterns queued
    with ``invalidate_after_commit`` are cleared after a successful commit
    and never on rollback.
    """
    if db_engine.async_session_factory is None:
        repos = replace(memory_repos, invalidations=[])
        yield repos
        await _clear_invalidated(repos)
        return

    async with db_engine.async_session_factory() as session:
        repos = pg_repos(session)
        try:
            yield repos
            await session.commit()
        except Exception:
            await session.rollback()
            raise
    await _clear_invalidated(repos)


async def _clear_invalidated(repos: Repos) -> None:
    for pattern in repos.invalidations:
        await cache_service.delete_pattern(pattern)


def require_user(
    raw_token: Annotated[str, Depends(oauth2_scheme)],
) -> Principal:
    """Extract and validate the JWT bearer token. Returns a Principal."""
    try:
        claims = token_service.decode_access_token(raw_token)
    except jwt.ExpiredSignatureError:
        logger.warning("Expired token rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    principal = Principal(
        user_id=claims["sub"],
        roles=frozenset(claims.get("roles", [])),
    )
    logger.debug(
        "Token validated for user=%s roles=%s", principal.user_id, principal.roles
    )
    return principal


def principal_uuid(principal: Principal) -> UUID:
    """The principal's user id as a UUID; 401 if the subject is not one."""
    try:
        return UUID(principal.user_id)
    except ValueError:
        logger.warning("Token subject is not a user id  sub=%s", principal.user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None


def require_role(role: str):
    """Dependency factory: demand a specific role.

    Usage: Depends(require_role("admin"))
    """

    def _guard(
        principal: Annotated[Principal, Depends(require_user)],
    ) -> Principal:
        if not principal.has_role(role):
            logger.warning(
                "Access denied: user=%s missing role=%s", principal.user_id, role
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return principal

    return _guard


CurrentPrincipal = Annotated[Principal, Depends(require_user)]
RequestRepos = Annotated[Repos, Depends(get_repos)]
