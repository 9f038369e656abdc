"""Pydantic models for questionnaire read-state and answer saves."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from clinicshield.models.enums import InputType, YesNoValue


class AnswerSaveModel(BaseModel):
    """Body of an answer save. Only the field matching the item's input type is used."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    yes_no_value: YesNoValue | None = Field(default=None, alias="yesNoValue")
    text_value: str | None = Field(default=None, alias="textValue")


class SaveResult(BaseModel):
    completion_percent: float


class StandardSummary(BaseModel):
    standard_id: str
    number: int
    title: str
    description: str
    item_count: int
    answered_count: int


class QuestionnaireItem(BaseModel):
    evidence_item_id: str
    ref: str
    input_type: InputType
    plain_english_question: str
    evidence_text: str
    clinic_help: str
    tooltip: str | None = None
    mandatory: bool
    yes_no_value: YesNoValue | None = None
    text_value: str = ""


class CurrentStandard(BaseModel):
    standard_id: str
    number: int
    title: str
    description: str
    items: List[QuestionnaireItem]


class QuestionnaireState(BaseModel):
    assessment_id: str
    dspt_year: str
    completion_percent: float
    standards: List[StandardSummary]
    current_standard: CurrentStandard


__all__ = [
    "AnswerSaveModel",
    "SaveResult",
    "StandardSummary",
    "QuestionnaireItem",
    "CurrentStandard",
    "QuestionnaireState",
]
