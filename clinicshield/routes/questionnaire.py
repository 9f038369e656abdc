"""Questionnaire read-state endpoint driving the wizard."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from clinicshield.logic.context import RequestContext, request_context
from clinicshield.logic.questionnaire_state import get_questionnaire_state
from clinicshield.logic.scoring import parse_standard_number
from clinicshield.models.enums import yes_no_options
from clinicshield.models.questionnaire import QuestionnaireState

router = APIRouter()


@router.get(
    "/questionnaire",
    summary="Get the current assessment's questionnaire state",
    operation_id="getQuestionnaireState",
    response_model=QuestionnaireState | None,
)
def get_questionnaire(
    standard: Optional[str] = Query(default=None, description="Standard number to open; defaults to 1"),
    ctx: RequestContext = Depends(request_context),
):
    return get_questionnaire_state(ctx, parse_standard_number(standard))


@router.get(
    "/questionnaire/yes-no-options",
    summary="List the answer options for yes/no evidence items",
    operation_id="listYesNoOptions",
)
def get_yes_no_options():
    return {"options": yes_no_options()}


__all__ = ["router", "get_questionnaire", "get_yes_no_options"]
