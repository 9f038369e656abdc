"""Pydantic models describing the DSPT reference catalog file."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from clinicshield.models.enums import Exemption, InputType


class CatalogEvidenceItem(BaseModel):
    ref: str
    input_type: InputType
    evidence_text: str
    tooltip: str | None = None
    mandatory: bool
    approaching_mandatory: bool
    plain_english_question: str
    clinic_help: str
    exemptions: List[Exemption] = Field(default_factory=list)
    change_from_v7: str | None = None
    new_in_v8: bool = False


class CatalogAssertion(BaseModel):
    ref: str
    title: str
    evidence_items: List[CatalogEvidenceItem]


class CatalogStandard(BaseModel):
    number: int = Field(ge=1)
    title: str
    description: str
    assertions: List[CatalogAssertion]


class Catalog(BaseModel):
    version: str
    dspt_year: str
    standards: List[CatalogStandard]

    def evidence_item_count(self) -> int:
        return sum(len(a.evidence_items) for s in self.standards for a in s.assertions)


__all__ = ["CatalogEvidenceItem", "CatalogAssertion", "CatalogStandard", "Catalog"]
