from __future__ import annotations

import logging
from uuid import UUID

from learnroute.models.roadmap import Roadmap
from learnroute.repos.roadmap_repo import RoadmapRepo
from learnroute.services.roadmap_templates import generate_steps, resolve_category

logger = logging.getLogger(__name__)


class RoadmapValidationError(ValueError):
    pass


async def create_roadmap(
    repo: RoadmapRepo,
    *,
    user_id: UUID,
    title: str,
    category: str,
    description: str | None = None,
) -> Roadmap:
    """Create a roadmap from the category's step template.

    Unknown categories use the default template but keep the requested
    category key on the record.
    """
    title = title.strip()
    category = category.strip()
    if not title:
        raise RoadmapValidationError("title must be non-empty")
    if not category:
        raise RoadmapValidationError("category must be non-empty")

    template = resolve_category(category)
    if template != category:
        logger.info(
            "No template for category=%s, using %s", category, template
        )

    roadmap = Roadmap.new(
        user_id=user_id,
        title=title,
        category=category,
        description=description,
        steps=generate_steps(category),
    )
    await repo.add(roadmap)
    logger.info(
        "Roadmap created  roadmap_id=%s user_id=%s category=%s steps=%d",
        roadmap.id,
        user_id,
        category,
        len(roadmap.steps),
    )
    return roadmap
