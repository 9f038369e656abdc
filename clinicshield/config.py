"""Configuration utilities for the DSPT questionnaire service.

This module loads application configuration with the following rules:
- Primary source: `clinicshield_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("clinicshield_config.json")
DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "dspt_v8_gp.json"
logger = logging.getLogger(__name__)

_DSPT_YEAR_RE = re.compile(r"^\d{4}-\d{2}$")
_TRUE_VALUES = {"1", "true", "yes", "on"}


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class DatabaseConfig(BaseModel):
    dsn: str

    @field_validator("dsn")
    @classmethod
    def dsn_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("database.dsn must be a non-empty string")
        return v


class AssessmentConfig(BaseModel):
    dspt_year: str = Field(default="2025-26")

    @field_validator("dspt_year")
    @classmethod
    def dspt_year_format(cls, v: str) -> str:
        if not _DSPT_YEAR_RE.match(v):
            raise ValueError("assessment.dspt_year must look like YYYY-YY, e.g. 2025-26")
        return v


class CatalogConfig(BaseModel):
    path: Path = Field(default=DEFAULT_CATALOG_PATH)
    seed_on_startup: bool = Field(default=True)


class AuthConfig(BaseModel):
    subject_header: str = Field(default="X-Auth-Subject", min_length=1)
    email_header: str = Field(default="X-Auth-Email", min_length=1)
    name_header: str = Field(default="X-Auth-Name", min_length=1)


class AppConfig(BaseModel):
    database: DatabaseConfig
    assessment: AssessmentConfig
    catalog: CatalogConfig
    auth: AuthConfig


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) clinicshield_config.json at project root (primary base)
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    def _pick(env_key: str, file_key: str, base_key: str, default: Optional[str] = None) -> Optional[str]:
        return _env(env_key) or _read_config_file(file_key) or _base(base_key, default)

    dsn = (
        _env("TEST_DATABASE_URL")
        or _pick("DATABASE_URL", "database.url", "database.dsn", "sqlite+pysqlite:///:memory:")
    )
    dspt_year = (_pick("DSPT_YEAR", "assessment.dspt_year", "assessment.dspt_year", "2025-26") or "").strip()
    catalog_path = _pick("CATALOG_PATH", "catalog.path", "catalog.path") or str(DEFAULT_CATALOG_PATH)
    seed_text = _pick("SEED_CATALOG_ON_STARTUP", "catalog.seed_on_startup", "catalog.seed_on_startup", "true")

    try:
        return AppConfig(
            database=DatabaseConfig(dsn=dsn),
            assessment=AssessmentConfig(dspt_year=dspt_year),
            catalog=CatalogConfig(
                path=Path(catalog_path),
                seed_on_startup=str(seed_text).strip().lower() in _TRUE_VALUES,
            ),
            auth=AuthConfig(
                subject_header=_pick("AUTH_SUBJECT_HEADER", "auth.subject_header", "auth.subject_header", "X-Auth-Subject"),
                email_header=_pick("AUTH_EMAIL_HEADER", "auth.email_header", "auth.email_header", "X-Auth-Email"),
                name_header=_pick("AUTH_NAME_HEADER", "auth.name_header", "auth.name_header", "X-Auth-Name"),
            ),
        )
    except PydanticValidationError as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "AssessmentConfig",
    "CatalogConfig",
    "AuthConfig",
    "DEFAULT_CATALOG_PATH",
    "load_config",
]
