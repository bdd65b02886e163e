"""Form controls with sync rules and an optional async availability check."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import TypeAlias

from planlink.core.availability import ValidationReason, ValidationResult, Validity

logger = logging.getLogger(__name__)

SyncValidator: TypeAlias = Callable[[str], ValidationReason | None]
AsyncValidator: TypeAlias = Callable[[str], Awaitable[ValidationResult]]


def required(value: str) -> ValidationReason | None:
    """Reject empty or whitespace-only values."""
    if not value or not value.strip():
        return ValidationReason.REQUIRED
    return None


@dataclass(frozen=True, slots=True)
class FieldMessages:
    """User-facing wording for a field's validation states."""

    display_name: str
    available: str = "exists"
    not_available: str = "does not exist in repository"

    def describe(self, reason: ValidationReason, detail: str | None = None) -> str:
        if reason is ValidationReason.REQUIRED:
            return f"{self.display_name} is required"
        if reason is ValidationReason.NOT_FOUND:
            return f"{self.display_name} {self.not_available}"
        if reason is ValidationReason.CHECK_FAILED:
            suffix = f": {detail}" if detail else ""
            return f"Could not check {self.display_name}{suffix}"
        return f"{self.display_name} is being checked"


class FormField:
    """Single form control.

    Validity is the conjunction of the sync validators and the latest settled
    async result for the current value. While an async check is outstanding
    the field is ``PENDING``.
    """

    def __init__(
        self,
        name: str,
        value: str = "",
        *,
        validators: Sequence[SyncValidator] = (),
        async_validator: AsyncValidator | None = None,
        messages: FieldMessages | None = None,
    ) -> None:
        self.name = name
        self.messages = messages or FieldMessages(display_name=name)
        self._value = value
        self._pristine = True
        self._validators = tuple(validators)
        self._async_validator = async_validator
        self._generation = 0
        self._tasks: set[asyncio.Task[None]] = set()
        self._closed = False
        self._sync_reasons = self._run_sync_validators(value)
        self._async_result: ValidationResult | None = None

    @property
    def value(self) -> str:
        return self._value

    @property
    def pristine(self) -> bool:
        return self._pristine

    @property
    def dirty(self) -> bool:
        return not self._pristine

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def validity(self) -> Validity:
        if self._sync_reasons:
            return Validity.INVALID
        if self._async_validator is None:
            return Validity.VALID
        if self._async_result is None:
            return Validity.PENDING
        return self._async_result.validity

    @property
    def valid(self) -> bool:
        return self.validity is Validity.VALID

    @property
    def pending(self) -> bool:
        return self.validity is Validity.PENDING

    @property
    def reasons(self) -> list[ValidationReason]:
        if self._sync_reasons:
            return list(self._sync_reasons)
        result = self._async_result
        if result is not None and result.reason is not None:
            return [result.reason]
        return []

    @property
    def errors(self) -> list[str]:
        if self._sync_reasons:
            return [self.messages.describe(reason) for reason in self._sync_reasons]
        result = self._async_result
        if result is None or result.reason is None:
            return []
        return [self.messages.describe(result.reason, result.detail)]

    @property
    def status_message(self) -> str | None:
        """Human-readable line shown next to the control."""
        if self.validity is Validity.VALID and self._async_validator is not None:
            return f"{self.messages.display_name} {self.messages.available}"
        errors = self.errors
        return errors[0] if errors else None

    def set_value(self, value: str) -> asyncio.Task[None] | None:
        """Store a user edit and revalidate."""
        self._ensure_open()
        self._value = value
        self._pristine = False
        return self.update_validity()

    def mark_as_dirty(self) -> None:
        self._ensure_open()
        self._pristine = False

    def update_validity(self) -> asyncio.Task[None] | None:
        """Re-run validators for the current value.

        Returns the task running the async check, if one was started.
        """
        self._ensure_open()
        self._generation += 1
        self._sync_reasons = self._run_sync_validators(self._value)
        self._async_result = None
        if self._sync_reasons or self._async_validator is None:
            return None

        task = asyncio.get_running_loop().create_task(
            self._run_async(self._generation, self._value),
            name=f"validate:{self.name}:{self._generation}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def apply_result(self, generation: int, result: ValidationResult) -> bool:
        """Merge an async result if it still belongs to the current value."""
        if self._closed or result.stale or generation != self._generation:
            return False
        self._async_result = result
        return True

    async def settled(self) -> Validity:
        """Wait for outstanding async checks and return the resulting validity."""
        while True:
            outstanding = {task for task in self._tasks if not task.done()}
            if not outstanding:
                return self.validity
            await asyncio.wait(outstanding)

    def close(self) -> None:
        self._closed = True
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

    async def _run_async(self, generation: int, value: str) -> None:
        assert self._async_validator is not None
        result = await self._async_validator(value)
        if not self.apply_result(generation, result):
            logger.debug("Ignoring outdated %s result for field %s", result.validity, self.name)

    def _run_sync_validators(self, value: str) -> list[ValidationReason]:
        reasons: list[ValidationReason] = []
        for validator in self._validators:
            reason = validator(value)
            if reason is not None:
                reasons.append(reason)
        return reasons

    def _ensure_open(self) -> None:
        if self._closed:
            msg = f"Field {self.name} is closed"
            raise RuntimeError(msg)


class Form(Mapping[str, FormField]):
    """Group of named fields; valid only when every field is valid."""

    def __init__(self, fields: Sequence[FormField]) -> None:
        self._fields = {field.name: field for field in fields}

    def __getitem__(self, name: str) -> FormField:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    @property
    def value(self) -> dict[str, str]:
        return {name: field.value for name, field in self._fields.items()}

    @property
    def valid(self) -> bool:
        return all(field.valid for field in self._fields.values())

    @property
    def pending(self) -> bool:
        return any(field.pending for field in self._fields.values())

    def invalid_fields(self) -> list[str]:
        return [name for name, field in self._fields.items() if not field.valid]

    async def settled(self) -> bool:
        for field in self._fields.values():
            await field.settled()
        return self.valid

    def close(self) -> None:
        for field in self._fields.values():
            field.close()
