"""Behave environment hooks for ClinicShield integration scenarios.

Scenarios run against a live API at `TEST_BASE_URL`. A `.env.test` file
(at the project root or under tests/integration/) is loaded first for
local runs; variables already set in the environment win.
"""

import os
from pathlib import Path
from typing import Any

import httpx
from dotenv import load_dotenv


REQUIRED_ENV_VARS = ("TEST_BASE_URL",)


def _load_env_fallback() -> None:
    for candidate in (Path(".env.test"), Path("tests") / "integration" / ".env.test"):
        if candidate.is_file():
            load_dotenv(candidate, override=False)


def _api_is_reachable(base_url: str) -> bool:
    try:
        resp = httpx.get(base_url.rstrip("/") + "/health", timeout=httpx.Timeout(5.0))
    except httpx.HTTPError:
        return False
    return resp.status_code == 200


def before_all(context: Any) -> None:
    """Validate mandatory environment and confirm the API answers /health.

    TEST_MOCK_MODE is ignored: integration scenarios always exercise the
    live HTTP and database paths.
    """
    _load_env_fallback()
    missing = [name for name in REQUIRED_ENV_VARS if not os.getenv(name, "").strip()]
    assert not missing, (
        "Missing required environment variables for integration tests: "
        + ", ".join(missing)
    )
    context.test_base_url = os.environ["TEST_BASE_URL"].rstrip("/")
    context.api_prefix = os.getenv("TEST_API_PREFIX", "/api/v1")
    context.test_mock_mode = False
    assert _api_is_reachable(context.test_base_url), (
        f"API not reachable at {context.test_base_url}/health; start it with "
        "`uvicorn clinicshield.main:create_app --factory`"
    )


def before_scenario(context: Any, scenario: Any) -> None:
    context.vars = {}
    context.last_response = None
