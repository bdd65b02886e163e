"""Shared API dependency providers."""

from __future__ import annotations

from planlink.config import load_settings
from planlink.core.github_client import ExistenceChecker, GitHubApiClient
from planlink.core.project_manager import ProjectDispatcher, ProjectManager
from planlink.db.store import SQLiteStore

_SETTINGS = load_settings()
_GITHUB_CLIENT = GitHubApiClient(
    base_url=_SETTINGS.github_api_url,
    timeout=_SETTINGS.check_timeout_seconds,
)


def get_store() -> SQLiteStore:
    _SETTINGS.db_path.parent.mkdir(parents=True, exist_ok=True)
    return SQLiteStore(db_path=_SETTINGS.db_path)


def get_project_manager() -> ProjectManager:
    return ProjectManager(store=get_store())


def get_project_dispatcher() -> ProjectDispatcher:
    return ProjectDispatcher(get_project_manager())


def get_existence_checker() -> ExistenceChecker:
    return _GITHUB_CLIENT
