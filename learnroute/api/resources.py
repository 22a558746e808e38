"""Resource catalog endpoints.

GET  /api/resources?category=   all resources, or one category
GET  /api/resources/{id}        one resource
POST /api/resources/multiple    batch lookup by id
POST /api/resources             add to the catalog (admin)
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from learnroute.api.dependencies import RequestRepos, require_role
from learnroute.api.schemas import ResourceOut
from learnroute.models.principal import Principal
from learnroute.models.resource import ResourceDraft
from learnroute.services import resource_service

router = APIRouter(prefix="/api/resources", tags=["resources"])


class ResourceIdsIn(BaseModel):
    ids: Any = None


class ResourceCreateIn(BaseModel):
    title: str
    type: str
    url: str
    category: str
    description: str | None = None
    thumbnail: str | None = None
    duration: str | None = None
    difficulty: str | None = "beginner"
    points_value: int = 10


@router.get("", response_model=list[ResourceOut])
async def list_resources(
    repos: RequestRepos,
    category: Annotated[str | None, Query()] = None,
) -> list[ResourceOut]:
    resources = await resource_service.list_resources(repos.resources, category)
    return [ResourceOut.from_resource(r) for r in resources]


@router.post("/multiple", response_model=list[ResourceOut])
async def get_multiple_resources(
    body: ResourceIdsIn, repos: RequestRepos
) -> list[ResourceOut]:
    ids = body.ids
    # bool is an int subclass; True is not a resource id.
    if not isinstance(ids, list) or not all(
        isinstance(i, int) and not isinstance(i, bool) for i in ids
    ):
        raise HTTPException(status_code=400, detail="Invalid resource IDs")
    resources = await repos.resources.get_many(ids)
    return [ResourceOut.from_resource(r) for r in resources]


@router.get("/{resource_id}", response_model=ResourceOut)
async def get_resource(resource_id: int, repos: RequestRepos) -> ResourceOut:
    resource = await repos.resources.get(resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail="Resource not found")
    return ResourceOut.from_resource(resource)


@router.post("", response_model=ResourceOut, status_code=status.HTTP_201_CREATED)
async def create_resource(
    body: ResourceCreateIn,
    _admin: Annotated[Principal, Depends(require_role("admin"))],
    repos: RequestRepos,
) -> ResourceOut:
    draft = ResourceDraft(**body.model_dump())
    try:
        resource = await resource_service.create_resource(repos.resources, draft)
    except resource_service.ResourceValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=str(e)
        ) from None
    repos.invalidate_after_commit(resource_service.RESOURCE_CACHE_PATTERN)
    return ResourceOut.from_resource(resource)
