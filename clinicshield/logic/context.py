"""Explicit per-request context passed to every questionnaire handler.

Authentication happens upstream; the trusted proxy forwards the caller's
subject (and optionally email and name) as request headers. Handlers receive
the resolved identity together with the open database connection instead of
reaching for ambient global state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.engine import Connection

from clinicshield.config import AppConfig
from clinicshield.db.base import connection_dependency
from clinicshield.logic import repository_organisations


@dataclass(frozen=True)
class Identity:
    subject: str
    email: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class CurrentUser:
    identity: Identity
    user: dict
    organisation_id: str


@dataclass
class RequestContext:
    identity: Optional[Identity]
    conn: Connection
    config: AppConfig


def get_current_user(ctx: RequestContext) -> Optional[CurrentUser]:
    """Resolve the caller's user row; None unless they belong to an organisation."""
    if ctx.identity is None:
        return None
    user = repository_organisations.get_user_by_subject(ctx.conn, ctx.identity.subject)
    if not user or not user.get("organisation_id"):
        return None
    return CurrentUser(identity=ctx.identity, user=user, organisation_id=str(user["organisation_id"]))


def get_app_config(request: Request) -> AppConfig:
    return request.app.state.config


def identity_from_headers(request: Request, config: AppConfig = Depends(get_app_config)) -> Optional[Identity]:
    """Build the caller identity from the configured trusted headers."""
    subject = (request.headers.get(config.auth.subject_header) or "").strip()
    if not subject:
        return None
    email = (request.headers.get(config.auth.email_header) or "").strip() or None
    name = (request.headers.get(config.auth.name_header) or "").strip() or None
    return Identity(subject=subject, email=email, name=name)


def request_context(
    identity: Optional[Identity] = Depends(identity_from_headers),
    conn: Connection = Depends(connection_dependency),
    config: AppConfig = Depends(get_app_config),
) -> RequestContext:
    return RequestContext(identity=identity, conn=conn, config=config)


__all__ = [
    "Identity",
    "CurrentUser",
    "RequestContext",
    "get_current_user",
    "get_app_config",
    "identity_from_headers",
    "request_context",
]
