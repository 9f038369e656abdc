"""Database bootstrap utilities for the questionnaire service.

Exposes engine/connection construction and a migrations runner that applies
SQL files from the project's migrations/ directory. No ORM models leak into
route handlers; repositories in `clinicshield.logic` use Core connections.
"""

from clinicshield.db.base import connection_dependency, get_engine
from clinicshield.db.migrations_runner import apply_migrations

__all__ = [
    "get_engine",
    "connection_dependency",
    "apply_migrations",
]
