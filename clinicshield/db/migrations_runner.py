"""Lightweight SQL migrations runner.

Applies .sql files in lexical order from the project's `migrations/` directory.
Skips rollback files and records applied filenames in a `schema_migrations`
journal table so the same migration is never applied twice to a database.
Intended for local development, CI and single-instance deployments.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

DEFAULT_MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"

_JOURNAL_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    filename TEXT PRIMARY KEY,
    applied_at TEXT NOT NULL
)
"""


def _iter_sql_files(root: Path) -> Iterable[Path]:
    for p in sorted(root.glob("*.sql")):
        if "rollback" in p.name.lower():
            continue
        yield p


def _exec_sql_compat(conn: Connection, sql: str) -> None:
    """Execute SQL text, tolerating multi-statement files on SQLite.

    SQLite's DB-API (pysqlite) does not allow multiple statements in a single
    execute() call, so statements are split on ';' for SQLite only, skipping
    comment-only and empty segments. Other dialects receive the full script.
    """
    name = (getattr(conn.dialect, "name", "") or "").lower()
    if "sqlite" not in name:
        conn.exec_driver_sql(sql)
        return
    for stmt in sql.split(";"):
        lines = [ln for ln in stmt.splitlines() if ln.strip() and not ln.strip().startswith("--")]
        s = "\n".join(lines).strip()
        if not s or s.upper() in {"BEGIN", "COMMIT", "END"}:
            continue
        conn.exec_driver_sql(s)


def applied_migrations(conn: Connection) -> set[str]:
    conn.exec_driver_sql(_JOURNAL_DDL)
    rows = conn.execute(sql_text("SELECT filename FROM schema_migrations")).fetchall()
    return {str(r[0]) for r in rows}


def apply_migrations(engine: Engine, migrations_dir: str | os.PathLike[str] | None = None) -> list[str]:
    """Apply pending migrations in one transaction; return the filenames applied."""
    root = Path(migrations_dir) if migrations_dir is not None else DEFAULT_MIGRATIONS_DIR
    if not root.exists():
        logger.warning("migrations_dir_missing path=%s", root)
        return []

    newly_applied: list[str] = []
    with engine.begin() as conn:
        applied = applied_migrations(conn)
        for sql_path in _iter_sql_files(root):
            fname = sql_path.name
            if fname in applied:
                continue
            sql = sql_path.read_text(encoding="utf-8")
            if not sql.strip():
                continue
            _exec_sql_compat(conn, sql)
            conn.execute(
                sql_text("INSERT INTO schema_migrations (filename, applied_at) VALUES (:f, :at)"),
                {
                    "f": fname,
                    # ISO-8601 UTC without fractional seconds (e.g., 2024-01-01T00:00:00Z)
                    "at": datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z"),
                },
            )
            newly_applied.append(fname)
    if newly_applied:
        logger.info("migrations_applied files=%s", ",".join(newly_applied))
    return newly_applied


__all__ = ["DEFAULT_MIGRATIONS_DIR", "apply_migrations", "applied_migrations"]
