"""Tests for the per-request repository dependency.

A recording session stands in for the PostgreSQL session so the order of
commit, rollback and cache clearing can be asserted without a database.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace

import pytest

from learnroute.api import dependencies
from learnroute.db import engine as db_engine
from learnroute.repos.registry import memory_repos


class _RecordingSession:
    def __init__(self, events: list[str]) -> None:
        self._events = events

    async def __aenter__(self) -> _RecordingSession:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self._events.append("close")

    async def commit(self) -> None:
        self._events.append("commit")

    async def rollback(self) -> None:
        self._events.append("rollback")


class _RecordingCache:
    def __init__(self, events: list[str]) -> None:
        self._events = events
        self.patterns: list[str] = []

    async def delete_pattern(self, pattern: str) -> None:
        self._events.append("invalidate")
        self.patterns.append(pattern)


@pytest.fixture
def events(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    recorded: list[str] = []
    monkeypatch.setattr(
        db_engine, "async_session_factory", lambda: _RecordingSession(recorded)
    )
    monkeypatch.setattr(
        dependencies,
        "pg_repos",
        lambda session: replace(memory_repos, invalidations=[]),
    )
    return recorded


@pytest.fixture
def cache(monkeypatch: pytest.MonkeyPatch, events: list[str]) -> _RecordingCache:
    recorder = _RecordingCache(events)
    monkeypatch.setattr(dependencies, "cache_service", recorder)
    return recorder


def test_cache_cleared_after_commit(events: list[str], cache: _RecordingCache) -> None:
    async def request() -> None:
        gen = dependencies.get_repos()
        repos = await gen.__anext__()
        repos.invalidate_after_commit("leaderboard:*")
        with pytest.raises(StopAsyncIteration):
            await gen.__anext__()

    asyncio.run(request())

    assert [e for e in events if e != "close"] == ["commit", "invalidate"]
    assert cache.patterns == ["leaderboard:*"]


def test_cache_cleared_after_session_closed(
    events: list[str], cache: _RecordingCache
) -> None:
    async def request() -> None:
        gen = dependencies.get_repos()
        repos = await gen.__anext__()
        repos.invalidate_after_commit("resources:*")
        with pytest.raises(StopAsyncIteration):
            await gen.__anext__()

    asyncio.run(request())

    assert events == ["commit", "close", "invalidate"]


def test_rollback_leaves_cache_alone(events: list[str], cache: _RecordingCache) -> None:
    async def request() -> None:
        gen = dependencies.get_repos()
        repos = await gen.__anext__()
        repos.invalidate_after_commit("leaderboard:*")
        with pytest.raises(RuntimeError):
            await gen.athrow(RuntimeError("handler failed"))

    asyncio.run(request())

    assert events == ["rollback", "close"]
    assert cache.patterns == []


def test_duplicate_patterns_cleared_once(events: list[str], cache: _RecordingCache) -> None:
    async def request() -> None:
        gen = dependencies.get_repos()
        repos = await gen.__anext__()
        repos.invalidate_after_commit("leaderboard:*")
        repos.invalidate_after_commit("leaderboard:*")
        repos.invalidate_after_commit("resources:*")
        with pytest.raises(StopAsyncIteration):
            await gen.__anext__()

    asyncio.run(request())

    assert cache.patterns == ["leaderboard:*", "resources:*"]


def test_each_request_starts_with_empty_queue(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(db_engine, "async_session_factory", None)
    cache = _RecordingCache([])
    monkeypatch.setattr(dependencies, "cache_service", cache)

    async def request(pattern: str | None) -> None:
        gen = dependencies.get_repos()
        repos = await gen.__anext__()
        if pattern is not None:
            repos.invalidate_after_commit(pattern)
        with pytest.raises(StopAsyncIteration):
            await gen.__anext__()

    asyncio.run(request("leaderboard:*"))
    asyncio.run(request(None))

    assert cache.patterns == ["leaderboard:*"]
    assert memory_repos.invalidations == []
