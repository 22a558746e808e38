from __future__ import annotations

import asyncio

import pytest
from prometheus_client import REGISTRY

from learnroute.models.resource import ResourceDraft
from learnroute.repos.resource_repo import InMemoryResourceRepo
from learnroute.services import resource_service
from learnroute.services.cache import cache_service
from learnroute.services.resource_service import (
    SAMPLE_RESOURCES,
    ResourceValidationError,
    create_resource,
    list_resources,
    seed_resources_if_empty,
)


def _sample(name: str, labels: dict | None = None) -> float:
    value = REGISTRY.get_sample_value(name, labels=labels or {})
    return value if value is not None else 0.0


def _draft(**overrides) -> ResourceDraft:
    fields = {
        "title": "Kubernetes in Depth",
        "type": "video",
        "url": "https://example.com/k8s",
        "category": "devops",
        "difficulty": "advanced",
    }
    fields.update(overrides)
    return ResourceDraft(**fields)


def test_seed_is_idempotent() -> None:
    repo = InMemoryResourceRepo()
    assert asyncio.run(seed_resources_if_empty(repo)) == len(SAMPLE_RESOURCES)
    assert asyncio.run(seed_resources_if_empty(repo)) == 0
    assert asyncio.run(repo.count()) == len(SAMPLE_RESOURCES)


def test_seeded_ids_start_at_one() -> None:
    repo = InMemoryResourceRepo()
    asyncio.run(seed_resources_if_empty(repo))
    first = asyncio.run(repo.get(1))
    assert first is not None
    assert first.title == SAMPLE_RESOURCES[0].title
    assert asyncio.run(repo.get(8)).difficulty == "advanced"


def test_list_by_category() -> None:
    repo = InMemoryResourceRepo()
    asyncio.run(seed_resources_if_empty(repo))
    web = asyncio.run(list_resources(repo, "web-development"))
    assert [r.id for r in web] == [1, 2]


def test_listing_is_served_from_cache() -> None:
    repo = InMemoryResourceRepo()
    asyncio.run(seed_resources_if_empty(repo))
    asyncio.run(list_resources(repo, "devops"))

    before = _sample("cache_operations_total", {"operation": "hit"})
    cached = asyncio.run(list_resources(repo, "devops"))
    after = _sample("cache_operations_total", {"operation": "hit"})

    assert after - before == 1
    assert [r.id for r in cached] == [8]


def test_create_leaves_cached_listing_until_cleared() -> None:
    repo = InMemoryResourceRepo()
    asyncio.run(seed_resources_if_empty(repo))
    assert len(asyncio.run(list_resources(repo, "devops"))) == 1

    created = asyncio.run(create_resource(repo, _draft()))

    assert created.id == 9
    # The caller clears the listing keys once its transaction has committed.
    assert [r.id for r in asyncio.run(list_resources(repo, "devops"))] == [8]
    asyncio.run(cache_service.delete_pattern(resource_service.RESOURCE_CACHE_PATTERN))
    assert [r.id for r in asyncio.run(list_resources(repo, "devops"))] == [8, 9]


def test_create_rejects_unknown_difficulty() -> None:
    with pytest.raises(ResourceValidationError):
        asyncio.run(create_resource(InMemoryResourceRepo(), _draft(difficulty="expert")))


def test_create_rejects_negative_points() -> None:
    with pytest.raises(ResourceValidationError):
        asyncio.run(create_resource(InMemoryResourceRepo(), _draft(points_value=-1)))


def test_get_many_dedupes_and_skips_unknown() -> None:
    repo = InMemoryResourceRepo()
    asyncio.run(seed_resources_if_empty(repo))
    found = asyncio.run(repo.get_many([3, 1, 3, 42]))
    assert [r.id for r in found] == [1, 3]


def test_cache_key_distinguishes_all_from_category() -> None:
    repo = InMemoryResourceRepo()
    asyncio.run(seed_resources_if_empty(repo))
    everything = asyncio.run(list_resources(repo))
    assert len(everything) == len(SAMPLE_RESOURCES)
    assert resource_service.cache_service._store  # type: ignore[attr-defined]
