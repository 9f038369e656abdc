"""Functional tests calling the save and read-state handlers with an explicit context.

These bypass HTTP and exercise the handlers the way the routes do: a
RequestContext carrying the caller identity, an open connection and config.
"""

from __future__ import annotations

import threading
import uuid

import pytest

from clinicshield.config import load_config
from clinicshield.logic.answer_save import _answer_column_and_value, save_answer
from clinicshield.logic.context import Identity, RequestContext, get_current_user
from clinicshield.logic.errors import (
    AnswerValidationError,
    NotAuthenticatedError,
    UnsupportedInputTypeError,
)
from clinicshield.logic.organisations import create_organisation
from clinicshield.logic.questionnaire_state import get_questionnaire_state, ref_sort_key
from clinicshield.logic import repository_answers, repository_assessments, repository_catalog
from clinicshield.logic.scoring import calculate_completion_percent
from clinicshield.models.enums import InputType, YesNoValue
from clinicshield.models.organisations import OrganisationCreateModel


@pytest.fixture
def ctx(functional_sqlite_bootstrap):
    """A context for a freshly onboarded caller inside a rolled-back transaction."""
    engine = functional_sqlite_bootstrap
    with engine.connect() as conn:
        trans = conn.begin()
        context = RequestContext(
            identity=Identity(subject=f"user_{uuid.uuid4().hex}", email="ig@example.nhs.uk"),
            conn=conn,
            config=load_config(),
        )
        create_organisation(context, OrganisationCreateModel(name="Canal Street", type="pharmacy"))
        yield context
        trans.rollback()


def _item_id(ctx: RequestContext, ref: str) -> str:
    item = repository_catalog.get_evidence_item_by_ref(ctx.conn, ref)
    assert item is not None
    return item["evidence_item_id"]


def test_onboarding_links_caller_as_practice_manager(ctx):
    current = get_current_user(ctx)
    assert current is not None
    assert current.user["role"] == "practice_manager"
    assert current.user["email"] == "ig@example.nhs.uk"


def test_save_then_read_state_agree(ctx):
    state = get_questionnaire_state(ctx)
    assert state is not None
    result = save_answer(ctx, state.assessment_id, _item_id(ctx, "9.1.1"), yes_no_value=YesNoValue.NO)
    assert result.completion_percent == 2.2

    nine = get_questionnaire_state(ctx, 9)
    assert nine.completion_percent == result.completion_percent
    summary = {s.number: s.answered_count for s in nine.standards}
    assert summary[9] == 1
    assert sum(summary.values()) == 1
    assert [i.yes_no_value for i in nine.current_standard.items if i.ref == "9.1.1"] == [YesNoValue.NO]


def test_save_without_identity_raises(ctx):
    anonymous = RequestContext(identity=None, conn=ctx.conn, config=ctx.config)
    with pytest.raises(NotAuthenticatedError):
        save_answer(anonymous, "any", "any", yes_no_value=YesNoValue.YES)
    assert get_questionnaire_state(anonymous) is None


def test_state_is_none_for_other_dspt_year(ctx):
    other_year = ctx.config.model_copy(
        update={"assessment": ctx.config.assessment.model_copy(update={"dspt_year": "2030-31"})}
    )
    assert get_questionnaire_state(RequestContext(identity=ctx.identity, conn=ctx.conn, config=other_year)) is None


def test_every_input_type_is_dispatched():
    assert _answer_column_and_value(InputType.YES_NO, YesNoValue.PARTIAL, None) == ("yes_no_value", "partial")
    assert _answer_column_and_value(InputType.TEXT, None, "  note ") == ("text_value", "note")
    assert _answer_column_and_value(InputType.TEXT, None, None) == ("text_value", "")
    with pytest.raises(AnswerValidationError):
        _answer_column_and_value(InputType.YES_NO, None, "yes")
    for unsupported in (InputType.DOCUMENT, InputType.DATE):
        with pytest.raises(UnsupportedInputTypeError) as excinfo:
            _answer_column_and_value(unsupported, None, "x")
        assert excinfo.value.input_type == unsupported.value


def test_ref_sort_key_orders_segments_numerically():
    refs = ["1.3.13", "1.3.2", "10.1.2", "1.1.1", "2.1.1"]
    assert sorted(refs, key=ref_sort_key) == ["1.1.1", "1.3.2", "1.3.13", "2.1.1", "10.1.2"]


def test_concurrent_saves_on_one_assessment_all_count(functional_sqlite_bootstrap):
    engine = functional_sqlite_bootstrap
    config = load_config()
    identity = Identity(subject=f"user_{uuid.uuid4().hex}", email="pm@example.nhs.uk")
    with engine.begin() as conn:
        setup = RequestContext(identity=identity, conn=conn, config=config)
        create_organisation(setup, OrganisationCreateModel(name="Parallel Practice", type="gp"))
        assessment_id = get_questionnaire_state(setup).assessment_id
        item_ids = [
            i["evidence_item_id"]
            for i in repository_catalog.list_evidence_items(conn)
            if i["input_type"] == InputType.YES_NO
        ][:8]

    errors: list[BaseException] = []

    def save(evidence_item_id: str) -> None:
        try:
            with engine.begin() as conn:
                save_answer(
                    RequestContext(identity=identity, conn=conn, config=config),
                    assessment_id,
                    evidence_item_id,
                    yes_no_value=YesNoValue.YES,
                )
        except Exception as exc:  # collected and asserted below
            errors.append(exc)

    threads = [threading.Thread(target=save, args=(item_id,)) for item_id in item_ids]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    with engine.connect() as conn:
        answers = repository_answers.list_answers_for_assessment(conn, assessment_id)
        stored = repository_assessments.get_assessment(conn, assessment_id)["completion_percent"]
    assert len(answers) == len(item_ids) == 8
    assert stored == calculate_completion_percent(45, answers) == 17.8
