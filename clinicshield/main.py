from __future__ import annotations

import logging
import os
from typing import Callable

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from sqlalchemy import text as sql_text
from sqlalchemy.exc import SQLAlchemyError

from clinicshield.config import AppConfig, load_config
from clinicshield.db.base import get_engine
from clinicshield.db.migrations_runner import apply_migrations
from clinicshield.db.seed import load_catalog, seed_catalog
from clinicshield.http.problem import (
    handle_http_exception,
    handle_questionnaire_error,
    handle_request_validation_error,
    handle_unexpected_error,
)
from clinicshield.http.request_id import RequestIdMiddleware
from clinicshield.logging_setup import configure_logging
from clinicshield.logic.errors import QuestionnaireError
from clinicshield.routes import api_router

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _health_check() -> Callable[[], dict]:
    def check() -> dict:
        try:
            with get_engine().connect() as conn:
                conn.execute(sql_text("SELECT 1"))
            return {"status": "ok", "db": True}
        except SQLAlchemyError as e:
            logger.error("Health DB check failed", exc_info=True)
            return {"status": "degraded", "db": False, "reason": str(e)}

    return check


def _bootstrap_database(config: AppConfig) -> None:
    """Apply migrations and seed the catalog when enabled via AUTO_APPLY_MIGRATIONS."""
    enable_flag = os.getenv("AUTO_APPLY_MIGRATIONS", "").strip().lower() in _TRUE_VALUES
    if not enable_flag:
        logger.info("AUTO_APPLY_MIGRATIONS disabled; skipping migrations at startup")
        return
    engine = get_engine()
    try:
        apply_migrations(engine)
    except SQLAlchemyError:
        logger.error("Failed to apply migrations at startup", exc_info=True)
        raise
    if config.catalog.seed_on_startup:
        seed_catalog(engine, load_catalog(config.catalog.path))


def create_app(config: AppConfig | None = None) -> FastAPI:
    configure_logging()
    config = config or load_config()
    get_engine(config.database.dsn)

    app = FastAPI(title="ClinicShield DSPT Questionnaire", version="0.1.0")
    app.state.config = config

    app.add_exception_handler(QuestionnaireError, handle_questionnaire_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    app.add_middleware(RequestIdMiddleware)

    @app.on_event("startup")
    def _startup() -> None:  # pragma: no cover - exercised via integration
        _bootstrap_database(config)

    app.include_router(api_router, prefix="/api/v1")

    health_check = _health_check()

    @app.get("/health")
    def health():  # pragma: no cover - trivial
        return health_check()

    logger.info("app_created dspt_year=%s", config.assessment.dspt_year)
    return app


# Intentionally do not instantiate the app at import time to prevent side effects.
