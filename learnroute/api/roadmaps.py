"""Roadmap endpoints.

POST  /api/roadmaps                               generate from a category template
GET   /api/roadmaps/{roadmap_id}                  one roadmap with its steps
GET   /api/users/{user_id}/roadmaps               a user's roadmaps
GET   /api/categories                             template keys
PATCH /api/roadmaps/{roadmap_id}/steps/{step_id}  check or uncheck a step
POST  /api/roadmaps/{roadmap_id}/complete         finalize and credit points
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from learnroute.api.dependencies import CurrentPrincipal, RequestRepos, principal_uuid
from learnroute.api.schemas import RoadmapOut
from learnroute.services import roadmap_service, users_service
from learnroute.services.progress_tracker import (
    ProgressValidationError,
    RoadmapNotFoundError,
    RoadmapProgressTracker,
    UserNotFoundError,
)
from learnroute.services.roadmap_templates import CATEGORIES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["roadmaps"])


class RoadmapCreateIn(BaseModel):
    title: str
    category: str
    description: str | None = None


class StepToggleIn(BaseModel):
    # Any: the tracker rejects everything that is not a JSON boolean,
    # including values pydantic would coerce ("true", 1).
    completed: Any = None


def _parse_id(raw: str, detail: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError:
        raise HTTPException(status_code=404, detail=detail) from None


@router.get("/categories", response_model=list[str])
async def list_categories() -> list[str]:
    return list(CATEGORIES)


@router.post(
    "/roadmaps", response_model=RoadmapOut, status_code=status.HTTP_201_CREATED
)
async def create_roadmap(
    body: RoadmapCreateIn, principal: CurrentPrincipal, repos: RequestRepos
) -> RoadmapOut:
    try:
        roadmap = await roadmap_service.create_roadmap(
            repos.roadmaps,
            user_id=principal_uuid(principal),
            title=body.title,
            category=body.category,
            description=body.description,
        )
    except roadmap_service.RoadmapValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    return RoadmapOut.from_roadmap(roadmap)


@router.get("/roadmaps/{roadmap_id}", response_model=RoadmapOut)
async def get_roadmap(roadmap_id: str, repos: RequestRepos) -> RoadmapOut:
    roadmap = await repos.roadmaps.get(_parse_id(roadmap_id, "Roadmap not found"))
    if roadmap is None:
        raise HTTPException(status_code=404, detail="Roadmap not found")
    return RoadmapOut.from_roadmap(roadmap)


@router.get("/users/{user_id}/roadmaps", response_model=list[RoadmapOut])
async def list_user_roadmaps(user_id: str, repos: RequestRepos) -> list[RoadmapOut]:
    roadmaps = await repos.roadmaps.list_by_user(_parse_id(user_id, "User not found"))
    return [RoadmapOut.from_roadmap(r) for r in roadmaps]


@router.patch("/roadmaps/{roadmap_id}/steps/{step_id}", response_model=RoadmapOut)
async def toggle_step(
    roadmap_id: str,
    step_id: str,
    body: StepToggleIn,
    _principal: CurrentPrincipal,
    repos: RequestRepos,
) -> RoadmapOut:
    tracker = RoadmapProgressTracker(repos)
    try:
        roadmap = await tracker.toggle_step(
            _parse_id(roadmap_id, "Roadmap or step not found"),
            step_id,
            body.completed,
        )
    except ProgressValidationError:
        logger.warning(
            "Rejected step toggle  roadmap_id=%s completed=%r",
            roadmap_id,
            body.completed,
        )
        raise HTTPException(status_code=400, detail="Invalid completed value") from None
    except RoadmapNotFoundError:
        raise HTTPException(
            status_code=404, detail="Roadmap or step not found"
        ) from None
    return RoadmapOut.from_roadmap(roadmap)


@router.post("/roadmaps/{roadmap_id}/complete", response_model=RoadmapOut)
async def complete_roadmap(
    roadmap_id: str, principal: CurrentPrincipal, repos: RequestRepos
) -> RoadmapOut:
    tracker = RoadmapProgressTracker(repos)
    try:
        result = await tracker.complete_roadmap(
            _parse_id(roadmap_id, "Roadmap not found"), principal_uuid(principal)
        )
    except RoadmapNotFoundError:
        raise HTTPException(status_code=404, detail="Roadmap not found") from None
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found") from None

    repos.invalidate_after_commit(users_service.LEADERBOARD_CACHE_PATTERN)
    return RoadmapOut.from_roadmap(result.roadmap)
