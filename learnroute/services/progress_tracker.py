"""Roadmap progress and completion bookkeeping.

Two operations change a roadmap after creation:

  toggle_step:
    flip one step's ``completed`` flag, then recompute ``progress`` and
    ``completed`` from the step list.  Never awards points.

  complete_roadmap:
    explicit, user-triggered finalization.  Forces ``completed=True`` and
    ``progress=100`` without touching the per-step flags, appends a
    CourseCompletion and credits the user's points.

Un-checking a step on a completed roadmap clears ``completed_at`` but does
not take back points credited by an earlier complete_roadmap.  Calling
complete_roadmap twice credits twice.  A user id with no account is
rejected before anything is written.

Both operations read the roadmap, build the new record in memory and write
it back whole.  There is no lock across that read and write: two concurrent
toggles on the same roadmap are last-writer-wins.  The points credit is a
single atomic increment in the user repository.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from learnroute.core.metrics import POINTS_AWARDED, ROADMAP_COMPLETIONS, STEP_TOGGLES
from learnroute.models.completion import CourseCompletion
from learnroute.models.roadmap import Roadmap
from learnroute.repos.registry import Repos

logger = logging.getLogger(__name__)

BASE_COMPLETION_POINTS = 100

DIFFICULTY_WEIGHTS: dict[str, Decimal] = {
    "beginner": Decimal("1.0"),
    "intermediate": Decimal("1.5"),
    "advanced": Decimal("2.0"),
}
_DEFAULT_WEIGHT = DIFFICULTY_WEIGHTS["beginner"]


class RoadmapNotFoundError(LookupError):
    pass


class StepNotFoundError(RoadmapNotFoundError):
    """The roadmap exists but has no step with the requested id."""


class UserNotFoundError(LookupError):
    pass


class ProgressValidationError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class CompletionResult:
    roadmap: Roadmap
    completion: CourseCompletion
    points_earned: int


def compute_progress(completed_count: int, total_steps: int) -> int:
    """Percentage of completed steps, rounded half up (12.5 -> 13).

    Integer arithmetic keeps the .5 boundary exact.
    """
    if total_steps <= 0:
        return 0
    return (200 * completed_count + total_steps) // (2 * total_steps)


def difficulty_weight(difficulty: str | None) -> Decimal:
    return DIFFICULTY_WEIGHTS.get(difficulty or "", _DEFAULT_WEIGHT)


def award_points(weights: Iterable[Decimal]) -> int:
    """Base award scaled by the mean difficulty weight.

    No weights means no multiplier: the base award is returned as is.
    """
    weights = list(weights)
    if not weights:
        return BASE_COMPLETION_POINTS
    average = sum(weights, Decimal(0)) / len(weights)
    points = (BASE_COMPLETION_POINTS * average).quantize(
        Decimal(1), rounding=ROUND_HALF_UP
    )
    return int(points)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RoadmapProgressTracker:
    def __init__(
        self,
        repos: Repos,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repos = repos
        self._clock = clock

    async def toggle_step(
        self, roadmap_id: UUID, step_id: str, completed: bool
    ) -> Roadmap:
        # bool is checked exactly; 1/0 and "true" are rejected.
        if not isinstance(completed, bool):
            raise ProgressValidationError("completed must be a boolean")

        roadmap = await self._repos.roadmaps.get(roadmap_id)
        if roadmap is None:
            raise RoadmapNotFoundError(f"roadmap {roadmap_id} not found")

        index = next(
            (i for i, step in enumerate(roadmap.steps) if step.id == step_id), None
        )
        if index is None:
            raise StepNotFoundError(
                f"step {step_id!r} not found in roadmap {roadmap_id}"
            )

        steps = list(roadmap.steps)
        steps[index] = replace(steps[index], completed=completed)

        done = sum(1 for s in steps if s.completed)
        all_completed = done == len(steps)

        if all_completed and not roadmap.completed:
            completed_at: datetime | None = self._clock()
            ROADMAP_COMPLETIONS.labels(trigger="steps").inc()
        elif all_completed:
            completed_at = roadmap.completed_at or self._clock()
        else:
            completed_at = None
            if roadmap.completed:
                logger.info(
                    "Roadmap reopened  roadmap_id=%s step_id=%s "
                    "(credited points are kept)",
                    roadmap_id,
                    step_id,
                    extra={"roadmap_id": str(roadmap_id), "step_id": step_id},
                )

        updated = replace(
            roadmap,
            steps=tuple(steps),
            progress=compute_progress(done, len(steps)),
            completed=all_completed,
            completed_at=completed_at,
        )
        saved = await self._repos.roadmaps.replace(updated)
        if saved is None:
            raise RoadmapNotFoundError(f"roadmap {roadmap_id} not found")

        STEP_TOGGLES.labels(completed=str(completed).lower()).inc()
        logger.debug(
            "Step toggled  roadmap_id=%s step_id=%s completed=%s progress=%d",
            roadmap_id,
            step_id,
            completed,
            saved.progress,
        )
        return saved

    async def calculate_points(self, roadmap: Roadmap) -> int:
        """Difficulty-weighted award for ``roadmap``.

        Every resource reference counts once per occurrence, so a resource
        listed under two steps weighs twice.  References that match no
        catalog record are left out of the average.
        """
        resource_ids = [rid for step in roadmap.steps for rid in step.resource_ids]
        if not resource_ids:
            return BASE_COMPLETION_POINTS

        catalog = {
            r.id: r for r in await self._repos.resources.get_many(resource_ids)
        }
        missing = {rid for rid in resource_ids if rid not in catalog}
        if missing:
            logger.warning(
                "Roadmap references unknown resources  roadmap_id=%s ids=%s",
                roadmap.id,
                sorted(missing),
            )
        return award_points(
            difficulty_weight(catalog[rid].difficulty)
            for rid in resource_ids
            if rid in catalog
        )

    async def complete_roadmap(
        self, roadmap_id: UUID, user_id: UUID
    ) -> CompletionResult:
        # The roadmap owner is not compared with user_id: any authenticated
        # user can complete any roadmap and is credited the points.
        roadmap = await self._repos.roadmaps.get(roadmap_id)
        if roadmap is None:
            raise RoadmapNotFoundError(f"roadmap {roadmap_id} not found")
        # Checked before any write so a missing user leaves no completion
        # behind on either backend.
        if await self._repos.users.get_by_id(user_id) is None:
            raise UserNotFoundError(f"user {user_id} not found")

        points_earned = await self.calculate_points(roadmap)
        now = self._clock()

        updated = replace(roadmap, completed=True, completed_at=now, progress=100)
        saved = await self._repos.roadmaps.replace(updated)
        if saved is None:
            raise RoadmapNotFoundError(f"roadmap {roadmap_id} not found")

        completion = CourseCompletion.new(
            user_id=user_id,
            roadmap_id=roadmap_id,
            points_earned=points_earned,
            completed_at=now,
        )
        await self._repos.completions.add(completion)

        if await self._repos.users.add_points(user_id, points_earned) is None:
            raise UserNotFoundError(f"user {user_id} not found")

        ROADMAP_COMPLETIONS.labels(trigger="explicit").inc()
        POINTS_AWARDED.inc(points_earned)
        logger.info(
            "Roadmap completed  roadmap_id=%s user_id=%s points=%d",
            roadmap_id,
            user_id,
            points_earned,
            extra={
                "roadmap_id": str(roadmap_id),
                "user_id": str(user_id),
                "points": points_earned,
            },
        )
        return CompletionResult(
            roadmap=saved, completion=completion, points_earned=points_earned
        )
