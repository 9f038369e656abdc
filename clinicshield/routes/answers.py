"""Answer save endpoint.

Each PUT writes one answer and returns the assessment's recomputed completion
percentage. Failures surface as application/problem+json.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from clinicshield.logic.answer_save import save_answer
from clinicshield.logic.context import RequestContext, request_context
from clinicshield.models.questionnaire import AnswerSaveModel, SaveResult

router = APIRouter()
logger = logging.getLogger(__name__)

_PROBLEM = {"content": {"application/problem+json": {}}}


@router.put(
    "/assessments/{assessment_id}/answers/{evidence_item_id}",
    summary="Save the answer to one evidence item",
    operation_id="saveAnswer",
    response_model=SaveResult,
    responses={401: _PROBLEM, 403: _PROBLEM, 404: _PROBLEM, 422: _PROBLEM},
)
def put_answer(
    assessment_id: str,
    evidence_item_id: str,
    payload: AnswerSaveModel,
    ctx: RequestContext = Depends(request_context),
):
    return save_answer(
        ctx,
        assessment_id,
        evidence_item_id,
        yes_no_value=payload.yes_no_value,
        text_value=payload.text_value,
    )


__all__ = ["router", "put_answer"]
