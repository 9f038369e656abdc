"""Read-side view of an assessment: catalog, answers and progress counts.

Per-standard counts use the same filled-answer predicate as the save path,
so the progress shown to the user always agrees with the stored
completion percentage.
"""

from __future__ import annotations

from typing import Optional

from clinicshield.logic import repository_answers, repository_assessments, repository_catalog
from clinicshield.logic.context import RequestContext, get_current_user
from clinicshield.logic.scoring import calculate_completion_percent, is_answer_filled
from clinicshield.models.questionnaire import (
    CurrentStandard,
    QuestionnaireItem,
    QuestionnaireState,
    StandardSummary,
)


def ref_sort_key(ref: str) -> tuple:
    """Order dotted refs numerically per segment, so 1.3.2 sorts before 1.3.13."""
    return tuple((0, int(part), "") if part.isdigit() else (1, 0, part) for part in ref.split("."))


def answers_by_evidence_item(answers: list[dict]) -> dict[str, dict]:
    by_item: dict[str, dict] = {}
    for answer in answers:
        by_item[str(answer["evidence_item_id"])] = answer
    return by_item


def get_questionnaire_state(ctx: RequestContext, standard_number: Optional[int] = None) -> Optional[QuestionnaireState]:
    """Assemble the wizard state for the caller's current assessment.

    Returns None when the caller is not onboarded, has no assessment for the
    configured DSPT year, or the catalog has not been seeded.
    """
    current = get_current_user(ctx)
    if current is None:
        return None

    assessment = repository_assessments.get_assessment_for_year(
        ctx.conn, current.organisation_id, ctx.config.assessment.dspt_year
    )
    if assessment is None:
        return None

    standards = repository_catalog.list_standards(ctx.conn)
    if not standards:
        return None

    items = repository_catalog.list_evidence_items(ctx.conn)
    answers = answers_by_evidence_item(
        repository_answers.list_answers_for_assessment(ctx.conn, assessment["assessment_id"])
    )

    selected = next((s for s in standards if s["number"] == standard_number), standards[0])

    item_counts: dict[str, int] = {}
    answered_counts: dict[str, int] = {}
    for item in items:
        key = item["standard_id"]
        item_counts[key] = item_counts.get(key, 0) + 1
        answer = answers.get(item["evidence_item_id"])
        if answer is not None and is_answer_filled(answer):
            answered_counts[key] = answered_counts.get(key, 0) + 1

    current_items = []
    for item in sorted(
        (i for i in items if i["standard_id"] == selected["standard_id"]),
        key=lambda i: ref_sort_key(i["ref"]),
    ):
        answer = answers.get(item["evidence_item_id"]) or {}
        current_items.append(
            QuestionnaireItem(
                evidence_item_id=item["evidence_item_id"],
                ref=item["ref"],
                input_type=item["input_type"],
                plain_english_question=item["plain_english_question"],
                evidence_text=item["evidence_text"],
                clinic_help=item["clinic_help"],
                tooltip=item["tooltip"],
                mandatory=item["mandatory"],
                yes_no_value=answer.get("yes_no_value"),
                text_value=answer.get("text_value") or "",
            )
        )

    return QuestionnaireState(
        assessment_id=assessment["assessment_id"],
        dspt_year=assessment["dspt_year"],
        completion_percent=calculate_completion_percent(len(items), answers.values()),
        standards=[
            StandardSummary(
                standard_id=s["standard_id"],
                number=int(s["number"]),
                title=s["title"],
                description=s["description"],
                item_count=item_counts.get(s["standard_id"], 0),
                answered_count=answered_counts.get(s["standard_id"], 0),
            )
            for s in standards
        ],
        current_standard=CurrentStandard(
            standard_id=selected["standard_id"],
            number=int(selected["number"]),
            title=selected["title"],
            description=selected["description"],
            items=current_items,
        ),
    )


__all__ = ["get_questionnaire_state", "ref_sort_key", "answers_by_evidence_item"]
