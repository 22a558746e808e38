"""Response bodies shared by several routers."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from learnroute.models.completion import CourseCompletion
from learnroute.models.resource import Resource
from learnroute.models.roadmap import Roadmap
from learnroute.models.user import User


class UserOut(BaseModel):
    id: str
    username: str
    email: str
    full_name: str | None
    bio: str | None
    profile_image: str | None
    points: int
    theme_preference: str
    current_skills: list[str]
    learning_goals: list[str]
    role: str
    created_at: datetime | None

    @classmethod
    def from_user(cls, user: User) -> UserOut:
        return cls(
            id=str(user.id),
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            bio=user.bio,
            profile_image=user.profile_image,
            points=user.points,
            theme_preference=user.theme_preference,
            current_skills=list(user.current_skills),
            learning_goals=list(user.learning_goals),
            role=user.role,
            created_at=user.created_at,
        )


class PublicUserOut(BaseModel):
    """Profile fields visible to other users (no email)."""

    id: str
    username: str
    full_name: str | None
    bio: str | None
    profile_image: str | None
    points: int
    current_skills: list[str]
    learning_goals: list[str]

    @classmethod
    def from_user(cls, user: User) -> PublicUserOut:
        return cls(
            id=str(user.id),
            username=user.username,
            full_name=user.full_name,
            bio=user.bio,
            profile_image=user.profile_image,
            points=user.points,
            current_skills=list(user.current_skills),
            learning_goals=list(user.learning_goals),
        )


class StepOut(BaseModel):
    id: str
    title: str
    description: str
    resource_ids: list[int]
    completed: bool


class RoadmapOut(BaseModel):
    id: str
    user_id: str
    title: str
    description: str | None
    category: str
    steps: list[StepOut]
    progress: int
    completed: bool
    completed_at: datetime | None
    created_at: datetime | None

    @classmethod
    def from_roadmap(cls, roadmap: Roadmap) -> RoadmapOut:
        return cls(
            id=str(roadmap.id),
            user_id=str(roadmap.user_id),
            title=roadmap.title,
            description=roadmap.description,
            category=roadmap.category,
            steps=[
                StepOut(
                    id=s.id,
                    title=s.title,
                    description=s.description,
                    resource_ids=list(s.resource_ids),
                    completed=s.completed,
                )
                for s in roadmap.steps
            ],
            progress=roadmap.progress,
            completed=roadmap.completed,
            completed_at=roadmap.completed_at,
            created_at=roadmap.created_at,
        )


class ResourceOut(BaseModel):
    id: int
    title: str
    type: str
    url: str
    category: str
    description: str | None
    thumbnail: str | None
    duration: str | None
    difficulty: str | None
    points_value: int

    @classmethod
    def from_resource(cls, r: Resource) -> ResourceOut:
        return cls(
            id=r.id,
            title=r.title,
            type=r.type,
            url=r.url,
            category=r.category,
            description=r.description,
            thumbnail=r.thumbnail,
            duration=r.duration,
            difficulty=r.difficulty,
            points_value=r.points_value,
        )


class CompletionOut(BaseModel):
    id: str
    user_id: str
    roadmap_id: str
    points_earned: int
    completed_at: datetime
    feedback: str | None

    @classmethod
    def from_completion(cls, c: CourseCompletion) -> CompletionOut:
        return cls(
            id=str(c.id),
            user_id=str(c.user_id),
            roadmap_id=str(c.roadmap_id),
            points_earned=c.points_earned,
            completed_at=c.completed_at,
            feedback=c.feedback,
        )
