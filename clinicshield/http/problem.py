"""Problem+JSON utilities and global exception handlers.

Defines the RFC7807 media type and handler callables that produce
application/problem+json responses for every failure mode.
"""

from __future__ import annotations

import logging
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from clinicshield.logic.errors import QuestionnaireError
from clinicshield.logic.problem_factory import (
    problem_from_error,
    problem_internal_error,
    problem_request_invalid,
)

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


async def handle_questionnaire_error(request: Request, exc: QuestionnaireError) -> JSONResponse:  # noqa: D401
    return JSONResponse(problem_from_error(exc), status_code=exc.status, media_type=PROBLEM_MEDIA_TYPE)


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:  # noqa: D401
    status_code = int(exc.status_code or 500)
    if isinstance(exc.detail, dict):
        detail = exc.detail
    else:
        detail = {"title": "Error", "status": status_code, "detail": str(exc.detail or "")}
    headers = {str(k): str(v) for k, v in (exc.headers or {}).items()}
    return JSONResponse(
        detail,
        status_code=status_code,
        media_type=PROBLEM_MEDIA_TYPE,
        headers=headers or None,
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    logger.info("request_validation_failed path=%s errors=%d", request.url.path, len(errors))
    return JSONResponse(problem_request_invalid(errors), status_code=422, media_type=PROBLEM_MEDIA_TYPE)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error path=%s", request.url.path, exc_info=exc)
    return JSONResponse(problem_internal_error(), status_code=500, media_type=PROBLEM_MEDIA_TYPE)


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "handle_questionnaire_error",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_unexpected_error",
]
