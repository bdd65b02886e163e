"""Project API schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from planlink.models.actions import NavigationTarget
from planlink.models.project import Project
from planlink.models.state import Package


class SubmitProjectRequest(BaseModel):
    """Raw setup form values plus the context needed to submit them."""

    values: dict[str, Any]
    owner_and_repo: str
    auth_token: str = ""
    current_package: Package | None = None


class SubmitProjectResponse(BaseModel):
    """Created project id and post-submit navigation target."""

    id: str
    navigate_to: NavigationTarget


class ProjectsResponse(BaseModel):
    """Collection response for projects."""

    items: list[Project] = Field(default_factory=list)
