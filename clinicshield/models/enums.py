"""Closed enumerations for DSPT catalog, organisation and answer values."""

from __future__ import annotations

from enum import Enum
from typing import NoReturn


class InputType(str, Enum):
    YES_NO = "yes_no"
    TEXT = "text"
    DOCUMENT = "document"
    DATE = "date"


class YesNoValue(str, Enum):
    YES = "yes"
    NO = "no"
    PARTIAL = "partial"
    NOT_SURE = "not_sure"
    NOT_APPLICABLE = "not_applicable"

    @property
    def label(self) -> str:
        return _YES_NO_LABELS[self]


_YES_NO_LABELS = {
    YesNoValue.YES: "Yes",
    YesNoValue.NO: "No",
    YesNoValue.PARTIAL: "Partial",
    YesNoValue.NOT_SURE: "Not sure",
    YesNoValue.NOT_APPLICABLE: "N/A",
}


class OrganisationType(str, Enum):
    GP = "gp"
    DENTAL = "dental"
    PHARMACY = "pharmacy"
    OPTICIAN = "optician"
    OTHER = "other"


class UserRole(str, Enum):
    PRACTICE_MANAGER = "practice_manager"
    IG_LEAD = "ig_lead"
    CALDICOTT_GUARDIAN = "caldicott_guardian"
    ADMIN = "admin"
    VIEWER = "viewer"


class AssessmentStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SUBMITTED = "submitted"


class Exemption(str, Enum):
    NHS_MAIL = "nhs_mail"
    CYBER_ESSENTIALS_PLUS = "cyber_essentials_plus"
    ISO27001 = "iso27001"
    PSN_IA = "psn_ia"
    AUDIT = "audit"


def assert_never(value: object) -> NoReturn:
    """Fail loudly when an enum dispatch meets a member it does not handle."""
    raise AssertionError(f"Unhandled enum member: {value!r}")


def yes_no_options() -> list[dict[str, str]]:
    return [{"value": member.value, "label": member.label} for member in YesNoValue]


__all__ = [
    "InputType",
    "YesNoValue",
    "OrganisationType",
    "UserRole",
    "AssessmentStatus",
    "Exemption",
    "assert_never",
    "yes_no_options",
]
