import pytest
from pydantic import ValidationError

from planlink.models.actions import AddProjectAction, NavigationTarget
from planlink.models.project import GitHubRepoRef, Project, ProjectDraft
from planlink.models.state import AppStateSnapshot, StaticStateSource


def test_project_defaults() -> None:
    draft = ProjectDraft(
        origin="core",
        plan_path="plan.sh",
        github=GitHubRepoRef(organization="habitat-sh", repo="habitat"),
    )
    project = Project.from_draft(draft)
    assert project.id
    assert project.github == draft.github


def test_state_defaults() -> None:
    state = AppStateSnapshot()
    assert state.my_origins == []
    assert state.github_auth_token == ""
    assert state.current_package is None
    assert StaticStateSource(state).snapshot() is state


def test_action_type_is_fixed() -> None:
    draft = ProjectDraft(
        origin="core",
        plan_path="plan.sh",
        github=GitHubRepoRef(organization="o", repo="r"),
    )
    with pytest.raises(ValidationError):
        AddProjectAction.model_validate(
            {
                "type": "DELETE_PROJECT",
                "payload": draft,
                "token": "",
                "navigate_to": NavigationTarget.projects(),
            }
        )
