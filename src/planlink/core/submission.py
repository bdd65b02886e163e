"""Submit-time reshaping of setup form values into a project-creation action."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TypeAlias, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from planlink.core.errors import MalformedSubmissionError
from planlink.models.actions import AddProjectAction, NavigationTarget
from planlink.models.project import GitHubRepoRef, ProjectDraft
from planlink.models.state import AppStateSnapshot

logger = logging.getLogger(__name__)

REPO_SEPARATOR = "/"

R = TypeVar("R")

Dispatch: TypeAlias = Callable[[AddProjectAction], Awaitable[R]]


class ProjectFormValues(BaseModel):
    """Flat values exactly as the setup form holds them."""

    model_config = ConfigDict(extra="ignore", strict=True)

    origin: str
    plan_path: str
    repo: str

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> ProjectFormValues:
        if not isinstance(values, Mapping):
            msg = f"Malformed project submission: expected a mapping, got {type(values).__name__}"
            raise MalformedSubmissionError(msg)
        try:
            return cls.model_validate(dict(values))
        except ValidationError as exc:
            fields = sorted({str(error["loc"][0]) for error in exc.errors() if error["loc"]})
            msg = f"Malformed project submission: {', '.join(fields) or 'invalid values'}"
            raise MalformedSubmissionError(msg, missing=fields) from exc


def split_owner_and_repo(owner_and_repo: str | None) -> tuple[str, str]:
    """Split ``owner/repo``; the repo part is empty when there is no separator."""
    parts = (owner_and_repo or "").split(REPO_SEPARATOR)
    owner = parts[0]
    repo = parts[1] if len(parts) > 1 else ""
    return owner, repo


def build_project_draft(
    values: Mapping[str, object] | ProjectFormValues,
    owner_and_repo: str,
) -> ProjectDraft:
    form_values = (
        values if isinstance(values, ProjectFormValues) else ProjectFormValues.from_mapping(values)
    )
    owner, repo = split_owner_and_repo(owner_and_repo)
    return ProjectDraft(
        origin=form_values.origin,
        plan_path=form_values.plan_path,
        github=GitHubRepoRef(organization=owner, repo=repo),
    )


def resolve_navigation_target(state: AppStateSnapshot) -> NavigationTarget:
    """Go back to the selected package if there is one, else to the project list."""
    if state.current_package is None:
        return NavigationTarget.projects()
    return NavigationTarget.package(state.current_package.ident)


def build_add_project_action(
    values: Mapping[str, object] | ProjectFormValues,
    *,
    owner_and_repo: str,
    state: AppStateSnapshot,
) -> AddProjectAction:
    return AddProjectAction(
        payload=build_project_draft(values, owner_and_repo),
        token=state.github_auth_token,
        navigate_to=resolve_navigation_target(state),
    )


async def submit_project(
    values: Mapping[str, object] | ProjectFormValues,
    *,
    owner_and_repo: str,
    state: AppStateSnapshot,
    dispatch: Dispatch[R],
) -> R:
    """Build the ADD_PROJECT action and hand it to ``dispatch``.

    Raises:
        MalformedSubmissionError: ``values`` lacks a key the payload needs;
            nothing is dispatched.
    """
    action = build_add_project_action(values, owner_and_repo=owner_and_repo, state=state)
    logger.debug("Dispatching %s for %s", action.type, action.payload.github)
    return await dispatch(action)
