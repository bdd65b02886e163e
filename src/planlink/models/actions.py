"""Actions emitted by the setup form for the dispatch layer."""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from planlink.models.project import ProjectDraft
from planlink.models.state import PackageIdent


class Route(StrEnum):
    """Named routes the UI can navigate to after submission."""

    PROJECTS = "Projects"
    PACKAGE = "Package"


class NavigationTarget(BaseModel):
    """Route name plus its parameters."""

    model_config = ConfigDict(frozen=True)

    route: Route
    params: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def projects(cls) -> NavigationTarget:
        return cls(route=Route.PROJECTS)

    @classmethod
    def package(cls, ident: PackageIdent) -> NavigationTarget:
        return cls(
            route=Route.PACKAGE,
            params={
                "origin": ident.origin,
                "name": ident.name,
                "version": ident.version,
                "release": ident.release,
            },
        )


class AddProjectAction(BaseModel):
    """Request to create a project and then navigate."""

    model_config = ConfigDict(frozen=True)

    type: Literal["ADD_PROJECT"] = "ADD_PROJECT"
    payload: ProjectDraft
    token: str
    navigate_to: NavigationTarget
