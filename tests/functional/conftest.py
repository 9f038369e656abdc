from __future__ import annotations

"""Functional test bootstrap.

Functional tests run the FastAPI app in-process against a file-backed SQLite
database shared across the session. Migrations and the DSPT catalog seed are
applied once at session start so the schema and catalog exist before tests
create the app via TestClient. Each test onboards its own organisation under a
fresh subject, so tests do not interfere with each other's answers.
"""

import os
import pathlib
import uuid

import pytest

_ROOT = pathlib.Path(__file__).resolve().parents[2]
_DB_FILE = _ROOT / "tmp" / "functional_tests.db"
_DB_FILE.parent.mkdir(parents=True, exist_ok=True)
if _DB_FILE.exists():
    _DB_FILE.unlink()

# Point the app at the shared SQLite file before any clinicshield import.
os.environ["TEST_DATABASE_URL"] = f"sqlite:///{_DB_FILE}"
os.environ["DATABASE_URL"] = os.environ["TEST_DATABASE_URL"]
# Startup bootstrap stays off; the session fixture migrates and seeds explicitly.
os.environ["AUTO_APPLY_MIGRATIONS"] = "0"


@pytest.fixture(scope="session", autouse=True)
def functional_sqlite_bootstrap():
    """Session-level bootstrap: apply migrations and seed the catalog once."""
    from clinicshield.db.base import get_engine
    from clinicshield.db.migrations_runner import apply_migrations
    from clinicshield.db.seed import seed_catalog

    engine = get_engine(os.environ["TEST_DATABASE_URL"])
    apply_migrations(engine)
    seed_catalog(engine)
    yield engine


@pytest.fixture(scope="session")
def app(functional_sqlite_bootstrap):
    from clinicshield.main import create_app

    return create_app()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)


def auth_headers(subject: str, email: str = "pm@example.nhs.uk") -> dict[str, str]:
    return {"X-Auth-Subject": subject, "X-Auth-Email": email, "X-Auth-Name": "Practice Manager"}


@pytest.fixture
def make_headers():
    """Factory for auth headers; a fresh subject per call unless one is given."""

    def _make(subject: str | None = None) -> dict[str, str]:
        return auth_headers(subject or f"user_{uuid.uuid4().hex}")

    return _make


@pytest.fixture
def onboarded(client):
    """Onboard a fresh organisation; return its headers and questionnaire state."""
    headers = auth_headers(f"user_{uuid.uuid4().hex}")
    resp = client.post(
        "/api/v1/organisations",
        json={"name": "Riverside Surgery", "type": "gp", "odsCode": "Y01234", "staffCount": 12},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    state = client.get("/api/v1/questionnaire", headers=headers).json()
    return {
        "headers": headers,
        "organisation_id": resp.json()["organisation_id"],
        "assessment_id": state["assessment_id"],
        "state": state,
    }
