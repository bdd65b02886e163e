"""Debounced, staleness-guarded availability checks for form fields."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum

from planlink.core.errors import ExistenceCheckError
from planlink.core.github_client import ExistenceChecker

logger = logging.getLogger(__name__)


class Validity(StrEnum):
    """Validation state of a form field."""

    VALID = "valid"
    INVALID = "invalid"
    PENDING = "pending"


class ValidationReason(StrEnum):
    """Why a field is not valid."""

    REQUIRED = "required"
    NOT_FOUND = "not_found"
    CHECK_FAILED = "check_failed"
    SUPERSEDED = "superseded"


class CheckOutcome(StrEnum):
    """Settled outcome of one existence check."""

    EXISTS = "exists"
    NOT_EXISTS = "not_exists"
    ERRORED = "errored"


@dataclass(frozen=True, slots=True)
class ExistenceCheckRequest:
    """One issued existence check, stamped with its issue token."""

    owner: str
    repo: str
    path: str
    token: int


@dataclass(frozen=True, slots=True)
class ExistenceCheckResult:
    """Outcome of an existence check keyed by its request token."""

    token: int
    outcome: CheckOutcome
    error: str | None = None


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Settled answer of an async validator.

    ``stale`` marks a result that was superseded by a newer invocation;
    callers must drop it without touching field state.
    """

    validity: Validity
    reason: ValidationReason | None = None
    detail: str | None = None
    token: int | None = None
    stale: bool = False

    @property
    def valid(self) -> bool:
        return self.validity is Validity.VALID

    @classmethod
    def ok(cls, *, token: int | None = None) -> ValidationResult:
        return cls(Validity.VALID, token=token)

    @classmethod
    def invalid(
        cls,
        reason: ValidationReason,
        *,
        detail: str | None = None,
        token: int | None = None,
    ) -> ValidationResult:
        return cls(Validity.INVALID, reason=reason, detail=detail, token=token)

    @classmethod
    def superseded(cls, token: int) -> ValidationResult:
        return cls(Validity.INVALID, reason=ValidationReason.SUPERSEDED, token=token, stale=True)


class DebouncedExistenceValidator:
    """Availability predicate over an :class:`ExistenceChecker`.

    Every call to :meth:`validate` takes a new token. A call waits out the
    debounce window first and gives up without touching the network if a newer
    call arrived meanwhile. When the network answer comes back it is only
    reported as authoritative if its token is still the latest one; otherwise
    it resolves as a stale result. In-flight requests are never aborted.

    Token state belongs to the instance, so every field needs its own.
    """

    def __init__(self, checker: ExistenceChecker, *, debounce_seconds: float = 0.3) -> None:
        self._checker = checker
        self._debounce_seconds = max(0.0, debounce_seconds)
        self._latest_token = 0
        self._requests_issued = 0

    @property
    def latest_token(self) -> int:
        return self._latest_token

    @property
    def requests_issued(self) -> int:
        """Number of calls that reached the existence checker."""
        return self._requests_issued

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    async def validate(
        self,
        owner: str,
        repo: str,
        path: str,
        credential: str,
    ) -> ValidationResult:
        self._latest_token += 1
        token = self._latest_token

        if not path.strip():
            return ValidationResult.invalid(ValidationReason.REQUIRED, token=token)
        if not owner or not repo:
            return ValidationResult.invalid(
                ValidationReason.CHECK_FAILED,
                detail="no repository selected",
                token=token,
            )

        await asyncio.sleep(self._debounce_seconds)
        if not self.is_current(token):
            logger.debug("Dropping debounced check %d for %r", token, path)
            return ValidationResult.superseded(token)

        request = ExistenceCheckRequest(owner=owner, repo=repo, path=path, token=token)
        result = await self._run_check(request, credential)
        if not self.is_current(token):
            logger.debug("Discarding superseded check %d for %r", token, path)
            return ValidationResult.superseded(token)

        if result.outcome is CheckOutcome.EXISTS:
            return ValidationResult.ok(token=token)
        if result.outcome is CheckOutcome.NOT_EXISTS:
            return ValidationResult.invalid(ValidationReason.NOT_FOUND, token=token)
        return ValidationResult.invalid(
            ValidationReason.CHECK_FAILED,
            detail=result.error,
            token=token,
        )

    async def _run_check(
        self, request: ExistenceCheckRequest, credential: str
    ) -> ExistenceCheckResult:
        self._requests_issued += 1
        try:
            found = await self._checker.exists(
                request.owner, request.repo, request.path, credential
            )
        except ExistenceCheckError as exc:
            logger.warning(
                "Existence check for %s/%s:%s failed (%s): %s",
                request.owner,
                request.repo,
                request.path,
                exc.category,
                exc,
            )
            return ExistenceCheckResult(request.token, CheckOutcome.ERRORED, str(exc))
        except (ValueError, TypeError) as exc:
            logger.warning("Existence check returned malformed data: %s", exc)
            return ExistenceCheckResult(request.token, CheckOutcome.ERRORED, str(exc))
        except Exception as exc:
            logger.warning(
                "Existence check for %s/%s:%s raised %s: %s",
                request.owner,
                request.repo,
                request.path,
                type(exc).__name__,
                exc,
            )
            return ExistenceCheckResult(request.token, CheckOutcome.ERRORED, str(exc))

        if not isinstance(found, bool):
            logger.warning("Existence check returned non-boolean %r", found)
            return ExistenceCheckResult(
                request.token, CheckOutcome.ERRORED, "malformed check response"
            )
        outcome = CheckOutcome.EXISTS if found else CheckOutcome.NOT_EXISTS
        return ExistenceCheckResult(request.token, outcome)
