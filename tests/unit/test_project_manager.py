from pathlib import Path

import pytest

from planlink.core.project_manager import ProjectDispatcher, ProjectManager
from planlink.core.submission import submit_project
from planlink.db.store import SQLiteStore
from planlink.models.actions import AddProjectAction, NavigationTarget, Route
from planlink.models.project import GitHubRepoRef, ProjectDraft
from planlink.models.state import AppStateSnapshot, Package, PackageIdent


def _draft() -> ProjectDraft:
    return ProjectDraft(
        origin="core",
        plan_path="plan.sh",
        github=GitHubRepoRef(organization="habitat-sh", repo="habitat"),
    )


@pytest.mark.asyncio
async def test_project_manager_create_list_delete(tmp_path: Path) -> None:
    manager = ProjectManager(SQLiteStore(tmp_path / "planlink.db"))
    created = await manager.create(_draft())

    projects = await manager.list()
    assert [project.id for project in projects] == [created.id]
    assert created.github.repo == "habitat"

    await manager.delete(created.id)
    assert await manager.get(created.id) is None


@pytest.mark.asyncio
async def test_dispatcher_creates_project_and_records_navigation(tmp_path: Path) -> None:
    manager = ProjectManager(SQLiteStore(tmp_path / "planlink.db"))
    dispatcher = ProjectDispatcher(manager)
    action = AddProjectAction(
        payload=_draft(),
        token="gh-token",
        navigate_to=NavigationTarget.projects(),
    )

    outcome = await dispatcher(action)

    assert outcome.navigate_to.route is Route.PROJECTS
    assert dispatcher.last_navigation == NavigationTarget.projects()
    assert await manager.get(outcome.project.id) == outcome.project


@pytest.mark.asyncio
async def test_submit_through_dispatcher(tmp_path: Path) -> None:
    manager = ProjectManager(SQLiteStore(tmp_path / "planlink.db"))
    ident = PackageIdent(origin="core", name="hab", version="1.0", release="2023")

    outcome = await submit_project(
        {"repo": "habitat", "origin": "core", "plan_path": "plan.sh"},
        owner_and_repo="habitat-sh/habitat",
        state=AppStateSnapshot(current_package=Package(ident=ident)),
        dispatch=ProjectDispatcher(manager),
    )

    assert outcome.navigate_to == NavigationTarget.package(ident)
    stored = await manager.list()
    assert stored[0].github == GitHubRepoRef(organization="habitat-sh", repo="habitat")
