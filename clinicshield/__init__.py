"""FastAPI application package for the ClinicShield DSPT questionnaire.

This package exposes a small FastAPI application factory. It wires only
cross-cutting concerns (request ids, problem+json errors, startup migrations
and catalog seeding) and mounts the API routers. Business logic lives in
`clinicshield/logic/` and route handlers in `clinicshield/routes/`.
"""

from __future__ import annotations

from clinicshield.main import create_app

__all__ = ["create_app"]
