"""Project domain models."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class GitHubRepoRef(BaseModel):
    """Repository coordinates in the shape the project service expects."""

    model_config = ConfigDict(frozen=True)

    organization: str
    repo: str


class ProjectDraft(BaseModel):
    """Project-creation payload assembled from the setup form."""

    model_config = ConfigDict(frozen=True)

    origin: str
    plan_path: str
    github: GitHubRepoRef


class Project(BaseModel):
    """Registered project metadata."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    origin: str
    plan_path: str
    github: GitHubRepoRef
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_draft(cls, draft: ProjectDraft) -> Project:
        return cls(origin=draft.origin, plan_path=draft.plan_path, github=draft.github)
