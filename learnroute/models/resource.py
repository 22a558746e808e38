from __future__ import annotations

from dataclasses import dataclass

DIFFICULTIES = ("beginner", "intermediate", "advanced")


@dataclass(frozen=True, slots=True)
class Resource:
    """Catalog entry (video, article, ...). Read-only to progress tracking."""

    id: int
    title: str
    type: str  # video|article|...
    url: str
    category: str
    description: str | None = None
    thumbnail: str | None = None
    duration: str | None = None
    difficulty: str | None = "beginner"  # beginner|intermediate|advanced
    points_value: int = 10


@dataclass(frozen=True, slots=True)
class ResourceDraft:
    """A resource before the catalog has assigned it an id."""

    title: str
    type: str
    url: str
    category: str
    description: str | None = None
    thumbnail: str | None = None
    duration: str | None = None
    difficulty: str | None = "beginner"
    points_value: int = 10

    def with_id(self, resource_id: int) -> Resource:
        return Resource(
            id=resource_id,
            title=self.title,
            type=self.type,
            url=self.url,
            category=self.category,
            description=self.description,
            thumbnail=self.thumbnail,
            duration=self.duration,
            difficulty=self.difficulty,
            points_value=self.points_value,
        )
