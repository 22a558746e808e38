"""Resource catalog: seeding, cached listings and creation."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict

from learnroute.models.resource import DIFFICULTIES, Resource, ResourceDraft
from learnroute.repos.resource_repo import ResourceRepo
from learnroute.services.cache import cache_service

logger = logging.getLogger(__name__)

_RESOURCE_CACHE_TTL = 300
_ALL = "*all*"
RESOURCE_CACHE_PATTERN = "resources:*"

SAMPLE_RESOURCES: tuple[ResourceDraft, ...] = (
    ResourceDraft(
        title="Introduction to Web Development",
        type="video",
        url="https://www.youtube.com/watch?v=example1",
        category="web-development",
        description="Learn the basics of HTML, CSS, and JavaScript",
        thumbnail="https://via.placeholder.com/300x200?text=Web+Development",
        duration="15:30",
        difficulty="beginner",
        points_value=10,
    ),
    ResourceDraft(
        title="Advanced React Patterns",
        type="video",
        url="https://www.youtube.com/watch?v=example2",
        category="web-development",
        description="Master advanced React patterns and techniques",
        thumbnail="https://via.placeholder.com/300x200?text=React+Patterns",
        duration="22:15",
        difficulty="intermediate",
        points_value=20,
    ),
    ResourceDraft(
        title="Getting Started with Machine Learning",
        type="article",
        url="https://example.com/machine-learning-intro",
        category="machine-learning",
        description="A comprehensive guide to get started with ML concepts",
        thumbnail="https://via.placeholder.com/300x200?text=Machine+Learning",
        duration="10 min read",
        difficulty="beginner",
        points_value=10,
    ),
    ResourceDraft(
        title="Python for Data Science",
        type="video",
        url="https://www.youtube.com/watch?v=example3",
        category="data-science",
        description="Learn Python basics for data analysis and visualization",
        thumbnail="https://via.placeholder.com/300x200?text=Python+Data+Science",
        duration="30:45",
        difficulty="beginner",
        points_value=15,
    ),
    ResourceDraft(
        title="Understanding Blockchain Technology",
        type="article",
        url="https://example.com/blockchain-explained",
        category="blockchain",
        description="Detailed explanation of blockchain technology and applications",
        thumbnail="https://via.placeholder.com/300x200?text=Blockchain",
        duration="15 min read",
        difficulty="intermediate",
        points_value=20,
    ),
    ResourceDraft(
        title="Mobile App Development with Flutter",
        type="video",
        url="https://www.youtube.com/watch?v=example4",
        category="mobile-development",
        description="Build cross-platform mobile apps with Flutter framework",
        thumbnail="https://via.placeholder.com/300x200?text=Flutter+Dev",
        duration="45:20",
        difficulty="intermediate",
        points_value=25,
    ),
    ResourceDraft(
        title="Introduction to Cloud Computing",
        type="article",
        url="https://example.com/cloud-computing-basics",
        category="cloud-computing",
        description="Learn the fundamentals of cloud services and deployment models",
        thumbnail="https://via.placeholder.com/300x200?text=Cloud+Computing",
        duration="12 min read",
        difficulty="beginner",
        points_value=15,
    ),
    ResourceDraft(
        title="DevOps Pipeline Automation",
        type="video",
        url="https://www.youtube.com/watch?v=example5",
        category="devops",
        description="Automate your development workflow with CI/CD pipelines",
        thumbnail="https://via.placeholder.com/300x200?text=DevOps",
        duration="38:10",
        difficulty="advanced",
        points_value=30,
    ),
)


class ResourceValidationError(ValueError):
    pass


async def seed_resources_if_empty(repo: ResourceRepo) -> int:
    """Insert SAMPLE_RESOURCES into an empty catalog. Returns rows added."""
    if await repo.count() > 0:
        return 0
    for draft in SAMPLE_RESOURCES:
        await repo.create(draft)
    logger.info("Seeded resource catalog  count=%d", len(SAMPLE_RESOURCES))
    return len(SAMPLE_RESOURCES)


async def list_resources(repo: ResourceRepo, category: str | None = None) -> list[Resource]:
    cache_key = f"resources:{category or _ALL}"

    cached = await cache_service.get(cache_key)
    if cached is not None:
        return [Resource(**r) for r in json.loads(cached)]

    if category:
        resources = await repo.list_by_category(category)
    else:
        resources = await repo.list_all()

    await cache_service.set(
        cache_key,
        json.dumps([asdict(r) for r in resources]),
        _RESOURCE_CACHE_TTL,
    )
    return resources


async def create_resource(repo: ResourceRepo, draft: ResourceDraft) -> Resource:
    if draft.difficulty is not None and draft.difficulty not in DIFFICULTIES:
        raise ResourceValidationError(
            f"difficulty must be one of {'|'.join(DIFFICULTIES)}"
        )
    if draft.points_value < 0:
        raise ResourceValidationError("points_value must be >= 0")

    resource = await repo.create(draft)
    logger.info(
        "Resource created  resource_id=%d category=%s", resource.id, resource.category
    )
    return resource
