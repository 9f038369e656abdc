"""Save a single answer and recompute the assessment's completion percentage.

The answer write and the percentage update share the request transaction.
The assessment row is touched first, which takes its write lock, so two
concurrent saves on one assessment serialise and neither recomputes the
percentage from a stale answer set.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from clinicshield.logic import repository_answers, repository_assessments, repository_catalog
from clinicshield.logic.context import RequestContext, get_current_user
from clinicshield.logic.errors import (
    AnswerValidationError,
    ForbiddenError,
    NotAuthenticatedError,
    NotFoundError,
    UnsupportedInputTypeError,
)
from clinicshield.logic.questionnaire_state import answers_by_evidence_item
from clinicshield.logic.scoring import calculate_completion_percent, normalize_text_answer
from clinicshield.models.enums import InputType, YesNoValue, assert_never
from clinicshield.models.questionnaire import SaveResult

logger = logging.getLogger(__name__)


def _answer_column_and_value(
    input_type: InputType,
    yes_no_value: Optional[YesNoValue],
    text_value: Optional[str],
) -> tuple[str, str]:
    """Pick the answer column the item's input type writes, with its value."""
    if input_type is InputType.YES_NO:
        if yes_no_value is None:
            raise AnswerValidationError("yes_no questions require yes_no_value")
        return "yes_no_value", YesNoValue(yes_no_value).value
    if input_type is InputType.TEXT:
        # Whitespace-only input means "no answer"; it is stored as "".
        return "text_value", normalize_text_answer(text_value) or ""
    if input_type is InputType.DOCUMENT or input_type is InputType.DATE:
        raise UnsupportedInputTypeError(input_type.value)
    assert_never(input_type)


def save_answer(
    ctx: RequestContext,
    assessment_id: str,
    evidence_item_id: str,
    yes_no_value: Optional[YesNoValue] = None,
    text_value: Optional[str] = None,
) -> SaveResult:
    current = get_current_user(ctx)
    if current is None:
        raise NotAuthenticatedError()

    now_ms = time.time() * 1000
    if not repository_assessments.touch_assessment(ctx.conn, assessment_id, now_ms):
        raise NotFoundError("Assessment not found")
    assessment = repository_assessments.get_assessment(ctx.conn, assessment_id)
    if assessment is None:
        raise NotFoundError("Assessment not found")
    if str(assessment["organisation_id"]) != current.organisation_id:
        raise ForbiddenError()

    item = repository_catalog.get_evidence_item(ctx.conn, evidence_item_id)
    if item is None:
        raise NotFoundError("Evidence item not found")

    column, value = _answer_column_and_value(InputType(item["input_type"]), yes_no_value, text_value)
    outcome = repository_answers.upsert_answer_value(
        ctx.conn,
        assessment_id=assessment_id,
        evidence_item_id=evidence_item_id,
        column=column,
        value=value,
        updated_by=current.identity.subject,
        now_ms=now_ms,
    )

    total_items = repository_catalog.count_evidence_items(ctx.conn)
    answers = answers_by_evidence_item(repository_answers.list_answers_for_assessment(ctx.conn, assessment_id))
    completion_percent = calculate_completion_percent(total_items, answers.values())
    repository_assessments.update_completion_percent(ctx.conn, assessment_id, completion_percent, now_ms)

    logger.info(
        "answer_saved",
        extra={
            "assessment_id": assessment_id,
            "evidence_item_id": evidence_item_id,
            "ref": item["ref"],
            "outcome": outcome,
            "completion_percent": completion_percent,
        },
    )
    return SaveResult(completion_percent=completion_percent)


__all__ = ["save_answer"]
