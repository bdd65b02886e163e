"""Read-only application state consumed by the setup form."""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field


class Origin(BaseModel):
    """Build origin the signed-in user belongs to."""

    model_config = ConfigDict(frozen=True)

    name: str


class PackageIdent(BaseModel):
    """Fully qualified identity of a build artifact."""

    model_config = ConfigDict(frozen=True)

    origin: str
    name: str
    version: str
    release: str


class Package(BaseModel):
    """Build artifact currently selected in the UI."""

    model_config = ConfigDict(frozen=True)

    ident: PackageIdent


class AppStateSnapshot(BaseModel):
    """Point-in-time view of the origins, GitHub session and selected package."""

    model_config = ConfigDict(frozen=True)

    my_origins: list[Origin] = Field(default_factory=list)
    github_auth_token: str = ""
    current_package: Package | None = None


class StateSource(Protocol):
    """Provider of application state snapshots."""

    def snapshot(self) -> AppStateSnapshot:
        """Return the current state."""


class StaticStateSource:
    """State source that always returns the same snapshot."""

    def __init__(self, state: AppStateSnapshot) -> None:
        self._state = state

    def snapshot(self) -> AppStateSnapshot:
        return self._state
