"""Plan file existence routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from planlink.api.deps import get_existence_checker
from planlink.api.schemas.plan_checks import PlanCheckRequest, PlanCheckResponse
from planlink.core.errors import ExistenceCheckError
from planlink.core.github_client import ExistenceChecker

router = APIRouter(prefix="/api/v1/plan-checks", tags=["plan-checks"])


@router.post("", response_model=PlanCheckResponse)
async def check_plan_path(
    request: PlanCheckRequest,
    checker: ExistenceChecker = Depends(get_existence_checker),
) -> PlanCheckResponse:
    if not request.path.strip():
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="path is required"
        )
    try:
        exists = await checker.exists(
            request.owner, request.repo, request.path, request.credential
        )
    except ExistenceCheckError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"{exc.category}: {exc}",
        ) from exc
    return PlanCheckResponse(exists=exists)
