"""Plan file check API schemas."""

from __future__ import annotations

from pydantic import BaseModel


class PlanCheckRequest(BaseModel):
    """Repository path to look up."""

    owner: str
    repo: str
    path: str
    credential: str = ""


class PlanCheckResponse(BaseModel):
    exists: bool
