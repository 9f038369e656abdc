"""Centralised construction of problem+json payloads.

Route modules and exception handlers build error bodies here instead of
embedding status codes and problem codes as string literals.
"""

from __future__ import annotations

from typing import Dict
import logging

from clinicshield.logic.errors import QuestionnaireError


logger = logging.getLogger(__name__)


def problem_from_error(exc: QuestionnaireError) -> Dict[str, object]:
    """Return the problem body for a domain error."""
    problem = {
        "title": exc.title,
        "status": exc.status,
        "detail": exc.detail,
        "code": exc.code,
    }
    logger.info("error_handler.handle", extra={"code": exc.code, "status": exc.status})
    return problem


def problem_request_invalid(errors: list) -> Dict[str, object]:
    """Return a 422 problem for a request body or query that failed validation."""
    return {
        "title": "Invalid Request",
        "status": 422,
        "detail": "Request validation failed",
        "code": "REQUEST_INVALID",
        "errors": errors,
    }


def problem_internal_error() -> Dict[str, object]:
    return {
        "title": "Internal Server Error",
        "status": 500,
        "detail": "An unexpected error occurred",
        "code": "INTERNAL_ERROR",
    }


__all__ = ["problem_from_error", "problem_request_invalid", "problem_internal_error"]
