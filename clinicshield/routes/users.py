"""Signed-in user endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clinicshield.logic.context import RequestContext, request_context
from clinicshield.logic.organisations import get_signed_in_user
from clinicshield.models.organisations import User

router = APIRouter()


@router.get(
    "/users/current",
    summary="Get the signed-in user (null when anonymous or not onboarded)",
    operation_id="getCurrentUser",
    response_model=User | None,
)
def get_user_current(ctx: RequestContext = Depends(request_context)):
    return get_signed_in_user(ctx)


__all__ = ["router", "get_user_current"]
