"""Error types shared across planlink layers."""

from __future__ import annotations

from typing import Literal, TypeAlias

CheckErrorCategory: TypeAlias = Literal[
    "network_timeout",
    "http_status",
    "invalid_payload",
    "transport_error",
]


class PlanlinkError(Exception):
    """Base class for planlink errors."""


class ExistenceCheckError(PlanlinkError):
    """Remote existence check could not produce an answer."""

    def __init__(self, message: str, *, category: CheckErrorCategory) -> None:
        super().__init__(message)
        self.category = category


class MalformedSubmissionError(PlanlinkError, ValueError):
    """Submitted form values are missing keys the payload needs."""

    def __init__(self, message: str, *, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = list(missing or [])


class FormNotSubmittableError(PlanlinkError):
    """Submit was requested while at least one field is not valid."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(f"Form is not valid: {', '.join(fields)}")
        self.fields = list(fields)
