"""Onboarding endpoints: create an organisation and read the caller's own."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from clinicshield.logic.context import RequestContext, request_context
from clinicshield.logic.organisations import create_organisation, get_current_organisation
from clinicshield.models.organisations import Organisation, OrganisationCreated, OrganisationCreateModel

router = APIRouter()
logger = logging.getLogger(__name__)

_PROBLEM = {"content": {"application/problem+json": {}}}


@router.post(
    "/organisations",
    summary="Create an organisation and its first assessment",
    operation_id="createOrganisation",
    status_code=201,
    response_model=OrganisationCreated,
    responses={401: _PROBLEM, 422: _PROBLEM},
)
def post_organisation(payload: OrganisationCreateModel, ctx: RequestContext = Depends(request_context)):
    return OrganisationCreated(organisation_id=create_organisation(ctx, payload))


@router.get(
    "/organisations/current",
    summary="Get the caller's organisation (null when not onboarded)",
    operation_id="getCurrentOrganisation",
    response_model=Organisation | None,
)
def get_organisation_current(ctx: RequestContext = Depends(request_context)):
    return get_current_organisation(ctx)


__all__ = ["router", "post_organisation", "get_organisation_current"]
