"""Project routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from planlink.api.deps import get_project_dispatcher, get_project_manager
from planlink.api.schemas.projects import (
    ProjectsResponse,
    SubmitProjectRequest,
    SubmitProjectResponse,
)
from planlink.core.errors import MalformedSubmissionError
from planlink.core.project_manager import ProjectDispatcher, ProjectManager
from planlink.core.submission import submit_project
from planlink.models.project import Project
from planlink.models.state import AppStateSnapshot

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.get("", response_model=ProjectsResponse)
async def list_projects(manager: ProjectManager = Depends(get_project_manager)) -> ProjectsResponse:
    return ProjectsResponse(items=await manager.list())


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SubmitProjectResponse)
async def create_project(
    request: SubmitProjectRequest,
    dispatcher: ProjectDispatcher = Depends(get_project_dispatcher),
) -> SubmitProjectResponse:
    state = AppStateSnapshot(
        github_auth_token=request.auth_token,
        current_package=request.current_package,
    )
    try:
        outcome = await submit_project(
            request.values,
            owner_and_repo=request.owner_and_repo,
            state=state,
            dispatch=dispatcher,
        )
    except MalformedSubmissionError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return SubmitProjectResponse(id=outcome.project.id, navigate_to=outcome.navigate_to)


@router.get("/{project_id}")
async def get_project(
    project_id: str, manager: ProjectManager = Depends(get_project_manager)
) -> dict[str, Project]:
    project = await manager.get(project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return {"project": project}


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    manager: ProjectManager = Depends(get_project_manager),
) -> None:
    await manager.delete(project_id)
