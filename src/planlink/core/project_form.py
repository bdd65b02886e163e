"""Setup form for registering a GitHub-hosted project."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import TypeVar

from planlink.config import Settings
from planlink.core.availability import DebouncedExistenceValidator, ValidationResult
from planlink.core.errors import FormNotSubmittableError
from planlink.core.form import FieldMessages, Form, FormField, required
from planlink.core.github_client import ExistenceChecker
from planlink.core.scheduler import TaskScheduler
from planlink.core.submission import Dispatch, split_owner_and_repo, submit_project
from planlink.models.project import Project, ProjectDraft
from planlink.models.state import StateSource

logger = logging.getLogger(__name__)

R = TypeVar("R")

ORIGIN = "origin"
PLAN_PATH = "plan_path"
REPO = "repo"
REVALIDATE_PLAN_PATH = "revalidate-plan-path"


class ProjectInfoForm:
    """Origin, repository and plan path fields plus submission.

    The plan path is checked against the selected repository. Shortly after
    construction the plan path is revalidated once so that a bad default is
    flagged before the user types anything. Call :meth:`close` on teardown.
    """

    def __init__(
        self,
        state: StateSource,
        checker: ExistenceChecker,
        *,
        owner_and_repo: str = "",
        project: Project | ProjectDraft | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._state = state
        self._settings = settings or Settings()
        self._owner_and_repo = owner_and_repo
        self._validator = DebouncedExistenceValidator(
            checker, debounce_seconds=self._settings.debounce_seconds
        )
        snapshot = state.snapshot()
        origins = [origin.name for origin in snapshot.my_origins]
        _, repo = split_owner_and_repo(owner_and_repo)

        self.form = Form(
            [
                FormField(
                    REPO,
                    repo,
                    validators=[required],
                    messages=FieldMessages(display_name="Repository"),
                ),
                FormField(
                    ORIGIN,
                    origins[0] if origins else "",
                    validators=[required],
                    messages=FieldMessages(display_name="Origin"),
                ),
                FormField(
                    PLAN_PATH,
                    project.plan_path if project is not None else self._settings.default_plan_path,
                    validators=[required],
                    async_validator=self._plan_path_exists,
                    messages=FieldMessages(display_name="File"),
                ),
            ]
        )
        self._closed = False
        self._scheduler = TaskScheduler()
        self._scheduler.schedule(
            REVALIDATE_PLAN_PATH,
            self._settings.revalidate_delay_seconds,
            self._revalidate_plan_path,
        )

    async def __aenter__(self) -> ProjectInfoForm:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def owner_and_repo(self) -> str:
        return self._owner_and_repo

    @property
    def repo_owner(self) -> str:
        return split_owner_and_repo(self._owner_and_repo)[0]

    @property
    def repo(self) -> str:
        return split_owner_and_repo(self._owner_and_repo)[1]

    @property
    def repository_url(self) -> str | None:
        if not self.repo:
            return None
        return f"https://github.com/{self._owner_and_repo}"

    @property
    def origin_choices(self) -> list[str]:
        return [origin.name for origin in self._state.snapshot().my_origins]

    @property
    def plan_path(self) -> FormField:
        return self.form[PLAN_PATH]

    @property
    def validator(self) -> DebouncedExistenceValidator:
        return self._validator

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def can_submit(self) -> bool:
        return not self._closed and self.form.valid

    def set_value(self, name: str, value: str) -> asyncio.Task[None] | None:
        return self.form[name].set_value(value)

    def select_repository(self, owner_and_repo: str) -> None:
        """Point the form at another repository and recheck the plan path."""
        self._owner_and_repo = owner_and_repo
        self.form[REPO].set_value(self.repo)
        self.plan_path.update_validity()

    async def settled(self) -> bool:
        return await self.form.settled()

    async def submit(self, dispatch: Dispatch[R]) -> R:
        if not self.can_submit:
            raise FormNotSubmittableError(self.form.invalid_fields())
        return await submit_project(
            self.form.value,
            owner_and_repo=self._owner_and_repo,
            state=self._state.snapshot(),
            dispatch=dispatch,
        )

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._scheduler.cancel_all()
        self.form.close()

    async def _plan_path_exists(self, path: str) -> ValidationResult:
        return await self._validator.validate(
            self.repo_owner,
            self.repo,
            path,
            self._state.snapshot().github_auth_token,
        )

    def _revalidate_plan_path(self) -> None:
        if self._closed:
            return
        logger.debug("Forcing validation of %s", PLAN_PATH)
        self.plan_path.mark_as_dirty()
        self.plan_path.update_validity()
