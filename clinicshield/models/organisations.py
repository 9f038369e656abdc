"""Pydantic models for onboarding an organisation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clinicshield.models.enums import OrganisationType, UserRole


class OrganisationCreateModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str
    type: OrganisationType
    ods_code: str | None = Field(default=None, alias="odsCode")
    staff_count: int | None = Field(default=None, alias="staffCount", ge=0)

    @field_validator("name")
    @classmethod
    def name_must_be_non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must be a non-empty string")
        return v.strip()


class Organisation(BaseModel):
    organisation_id: str
    name: str
    type: OrganisationType
    ods_code: str | None = None
    ico_registration_number: str | None = None
    staff_count: int | None = None
    onboarding_complete: bool
    created_by: str


class OrganisationCreated(BaseModel):
    organisation_id: str


class User(BaseModel):
    user_id: str
    subject: str
    email: str
    name: str | None = None
    organisation_id: str | None = None
    role: UserRole


__all__ = ["OrganisationCreateModel", "Organisation", "OrganisationCreated", "User"]
