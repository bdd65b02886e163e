"""Project registration and ADD_PROJECT dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from planlink.db.store import SQLiteStore
from planlink.models.actions import AddProjectAction, NavigationTarget
from planlink.models.project import Project, ProjectDraft

logger = logging.getLogger(__name__)


class ProjectManager:
    """Manage registered projects."""

    def __init__(self, store: SQLiteStore) -> None:
        self._store = store

    async def create(self, draft: ProjectDraft) -> Project:
        project = Project.from_draft(draft)
        await self._store.upsert_project(project)
        logger.info(
            "Registered project %s for %s/%s (origin %s)",
            project.id,
            project.github.organization,
            project.github.repo,
            project.origin,
        )
        return project

    async def list(self) -> list[Project]:
        return await self._store.list_projects()

    async def get(self, project_id: str) -> Project | None:
        return await self._store.get_project(project_id)

    async def delete(self, project_id: str) -> None:
        await self._store.delete_project(project_id)


@dataclass(slots=True)
class DispatchOutcome:
    """Created project and where the UI should go next."""

    project: Project
    navigate_to: NavigationTarget


class ProjectDispatcher:
    """Executes ADD_PROJECT actions against a :class:`ProjectManager`."""

    def __init__(self, manager: ProjectManager) -> None:
        self._manager = manager
        self.last_navigation: NavigationTarget | None = None

    async def __call__(self, action: AddProjectAction) -> DispatchOutcome:
        project = await self._manager.create(action.payload)
        self.last_navigation = action.navigate_to
        return DispatchOutcome(project=project, navigate_to=action.navigate_to)
