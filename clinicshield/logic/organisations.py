"""Onboarding: create an organisation, link the caller and open the first assessment."""

from __future__ import annotations

import logging
import time
from typing import Optional

from clinicshield.logic import repository_assessments, repository_organisations
from clinicshield.logic.context import RequestContext, get_current_user
from clinicshield.logic.errors import NotAuthenticatedError
from clinicshield.models.organisations import OrganisationCreateModel

logger = logging.getLogger(__name__)


def create_organisation(ctx: RequestContext, payload: OrganisationCreateModel) -> str:
    """Create the organisation and the assessment for the configured DSPT year.

    The caller's user record is created on first use (as practice manager) or
    re-pointed at the new organisation. Runs inside the request transaction.
    """
    if ctx.identity is None:
        raise NotAuthenticatedError()
    identity = ctx.identity
    now_ms = time.time() * 1000

    organisation_id = repository_organisations.insert_organisation(
        ctx.conn,
        name=payload.name,
        org_type=payload.type,
        ods_code=payload.ods_code,
        staff_count=payload.staff_count,
        created_by=identity.subject,
    )

    existing = repository_organisations.get_user_by_subject(ctx.conn, identity.subject)
    if existing:
        repository_organisations.set_user_organisation(ctx.conn, existing["user_id"], organisation_id)
    else:
        repository_organisations.insert_user(
            ctx.conn,
            subject=identity.subject,
            email=identity.email or "",
            name=identity.name,
            organisation_id=organisation_id,
        )

    assessment_id = repository_assessments.insert_assessment(
        ctx.conn,
        organisation_id=organisation_id,
        dspt_year=ctx.config.assessment.dspt_year,
        now_ms=now_ms,
    )
    logger.info(
        "organisation_created",
        extra={"organisation_id": organisation_id, "assessment_id": assessment_id, "subject": identity.subject},
    )
    return organisation_id


def get_signed_in_user(ctx: RequestContext) -> Optional[dict]:
    """Return the caller's user record, or None when anonymous or not yet onboarded."""
    if ctx.identity is None:
        return None
    return repository_organisations.get_user_by_subject(ctx.conn, ctx.identity.subject)


def get_current_organisation(ctx: RequestContext) -> Optional[dict]:
    current = get_current_user(ctx)
    if current is None:
        return None
    return repository_organisations.get_organisation(ctx.conn, current.organisation_id)


__all__ = ["create_organisation", "get_current_organisation", "get_signed_in_user"]
