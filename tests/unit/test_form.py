import asyncio
from functools import partial

import pytest

from planlink.core.availability import (
    DebouncedExistenceValidator,
    ValidationReason,
    ValidationResult,
    Validity,
)
from planlink.core.form import FieldMessages, Form, FormField, required
from tests.support.checkers import ScriptedChecker


def _plan_field(checker: ScriptedChecker, *, debounce: float = 0.0, value: str = "") -> FormField:
    validator = DebouncedExistenceValidator(checker, debounce_seconds=debounce)
    return FormField(
        "plan_path",
        value,
        validators=[required],
        async_validator=partial(validator.validate, "habitat-sh", "habitat", credential="tok"),
        messages=FieldMessages(display_name="File"),
    )


def test_required_rule() -> None:
    assert required("") is ValidationReason.REQUIRED
    assert required("  ") is ValidationReason.REQUIRED
    assert required("plan.sh") is None


def test_field_without_async_validator() -> None:
    field = FormField("origin", "", validators=[required], messages=FieldMessages("Origin"))
    assert field.pristine and not field.dirty
    assert field.validity is Validity.INVALID
    assert field.errors == ["Origin is required"]


@pytest.mark.asyncio
async def test_sync_only_field_becomes_valid_on_edit() -> None:
    field = FormField("origin", "", validators=[required])

    task = field.set_value("core")

    assert task is None
    assert field.valid
    assert field.dirty and not field.pristine


@pytest.mark.asyncio
async def test_async_field_goes_pending_then_valid() -> None:
    checker = ScriptedChecker(answers={"plan.sh": True})
    field = _plan_field(checker)

    field.set_value("plan.sh")
    assert field.validity is Validity.PENDING
    assert field.errors == []

    assert await field.settled() is Validity.VALID
    assert field.status_message == "File exists"


@pytest.mark.asyncio
async def test_async_field_reports_missing_file() -> None:
    field = _plan_field(ScriptedChecker())

    field.set_value("missing.sh")

    assert await field.settled() is Validity.INVALID
    assert field.reasons == [ValidationReason.NOT_FOUND]
    assert field.errors == ["File does not exist in repository"]


@pytest.mark.asyncio
async def test_empty_value_issues_no_check() -> None:
    checker = ScriptedChecker(answers={"plan.sh": True})
    field = _plan_field(checker)

    field.set_value("")

    assert await field.settled() is Validity.INVALID
    assert field.errors == ["File is required"]
    assert checker.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "delays",
    [
        {"a.sh": 0.08, "ab.sh": 0.04, "abc.sh": 0.0},
        {"a.sh": 0.0, "ab.sh": 0.04, "abc.sh": 0.08},
        {"a.sh": 0.08, "ab.sh": 0.0, "abc.sh": 0.04},
    ],
)
async def test_final_value_sets_terminal_validity(delays: dict[str, float]) -> None:
    checker = ScriptedChecker(
        answers={"a.sh": True, "ab.sh": True, "abc.sh": False},
        delays=delays,
    )
    field = _plan_field(checker)

    for value in ("a.sh", "ab.sh", "abc.sh"):
        field.set_value(value)
        await asyncio.sleep(0.01)

    assert await field.settled() is Validity.INVALID
    assert field.reasons == [ValidationReason.NOT_FOUND]
    await asyncio.sleep(0.1)
    assert field.reasons == [ValidationReason.NOT_FOUND]


@pytest.mark.asyncio
async def test_clearing_value_discards_in_flight_result() -> None:
    checker = ScriptedChecker(answers={"plan.sh": True}, delays={"plan.sh": 0.05})
    field = _plan_field(checker)

    field.set_value("plan.sh")
    await asyncio.sleep(0.01)
    field.set_value("")
    await asyncio.sleep(0.1)

    assert checker.completed == ["plan.sh"]
    assert field.validity is Validity.INVALID
    assert field.reasons == [ValidationReason.REQUIRED]


@pytest.mark.asyncio
async def test_returning_to_confirmed_value_never_shows_stale_invalid() -> None:
    checker = ScriptedChecker(answers={"plan.sh": True})
    field = _plan_field(checker, debounce=0.03)

    field.set_value("plan.sh")
    assert await field.settled() is Validity.VALID

    field.set_value("plan.s")
    field.set_value("plan.sh")
    assert field.validity is Validity.PENDING

    assert await field.settled() is Validity.VALID
    assert checker.paths == ["plan.sh", "plan.sh"]


def test_stale_or_outdated_results_are_ignored() -> None:
    field = FormField("plan_path", "plan.sh", async_validator=_never_called)

    assert not field.apply_result(0, ValidationResult.superseded(3))
    assert not field.apply_result(5, ValidationResult.ok(token=5))
    assert field.validity is Validity.PENDING

    assert field.apply_result(0, ValidationResult.ok(token=1))
    assert field.apply_result(0, ValidationResult.ok(token=1))
    assert field.valid


@pytest.mark.asyncio
async def test_close_cancels_checks_and_rejects_edits() -> None:
    checker = ScriptedChecker(answers={"plan.sh": True}, delays={"plan.sh": 0.05})
    field = _plan_field(checker)
    task = field.set_value("plan.sh")
    assert task is not None

    field.close()
    await asyncio.sleep(0.1)

    assert task.cancelled()
    assert field.validity is Validity.PENDING
    with pytest.raises(RuntimeError):
        field.set_value("other.sh")


@pytest.mark.asyncio
async def test_form_validity_and_values() -> None:
    checker = ScriptedChecker(answers={"plan.sh": True})
    form = Form(
        [
            FormField("origin", "core", validators=[required]),
            _plan_field(checker, value="plan.sh"),
        ]
    )

    assert form.value == {"origin": "core", "plan_path": "plan.sh"}
    assert not form.valid
    assert form.pending
    assert form.invalid_fields() == ["plan_path"]

    form["plan_path"].update_validity()
    assert await form.settled()
    assert form.invalid_fields() == []
    assert len(form) == 2
    assert list(form) == ["origin", "plan_path"]


async def _never_called(value: str) -> ValidationResult:
    raise AssertionError(value)


@pytest.mark.asyncio
async def test_checker_crash_settles_invalid_instead_of_pending() -> None:
    checker = ScriptedChecker(errors={"plan.sh": OSError("network unreachable")})
    field = _plan_field(checker)

    task = field.set_value("plan.sh")

    assert await field.settled() is Validity.INVALID
    assert task is not None and task.exception() is None
    assert field.errors == ["Could not check File: network unreachable"]
