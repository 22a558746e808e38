from __future__ import annotations

import asyncio

from learnroute.services.cache import InMemoryCacheService


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_get_returns_value_until_ttl_expires() -> None:
    clock = _Clock()
    cache = InMemoryCacheService(clock=clock)
    asyncio.run(cache.set("k", "v", 10))
    assert asyncio.run(cache.get("k")) == "v"
    clock.now += 10
    assert asyncio.run(cache.get("k")) is None


def test_zero_ttl_disables_caching() -> None:
    cache = InMemoryCacheService()
    asyncio.run(cache.set("k", "v", 0))
    assert asyncio.run(cache.get("k")) is None


def test_delete_pattern_is_prefix_scoped() -> None:
    cache = InMemoryCacheService()
    asyncio.run(cache.set("leaderboard:10", "a", 60))
    asyncio.run(cache.set("leaderboard:5", "b", 60))
    asyncio.run(cache.set("resources:*all*", "c", 60))

    asyncio.run(cache.delete_pattern("leaderboard:*"))

    assert asyncio.run(cache.get("leaderboard:10")) is None
    assert asyncio.run(cache.get("leaderboard:5")) is None
    assert asyncio.run(cache.get("resources:*all*")) == "c"
