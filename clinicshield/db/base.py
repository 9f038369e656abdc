"""SQLAlchemy engine and session helpers.

The service targets PostgreSQL in production but supports SQLite for local
development and CI. No declarative models are defined here; this module only
manages connection lifecycle. Repositories work on Core connections.
"""

from __future__ import annotations

import logging
import os
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def _db_url() -> str:
    return (
        os.getenv("TEST_DATABASE_URL")
        or os.getenv("DATABASE_URL")
        or "sqlite+pysqlite:///:memory:"
    )


_ENGINE: Engine | None = None
_ENGINE_URL: str | None = None


def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:  # type: ignore[no-untyped-def]
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(url: str | None = None) -> Engine:
    """Return a singleton SQLAlchemy Engine for the given URL.

    Called without a URL, reuses whichever engine is current. For SQLite
    in-memory URLs, use a StaticPool to keep a single connection alive across
    connections and threads during tests.
    """
    global _ENGINE, _ENGINE_URL
    if url is None and _ENGINE is not None:
        return _ENGINE
    resolved_url = url or _db_url()

    if _ENGINE is None or _ENGINE_URL != resolved_url:
        kwargs: dict = {"future": True, "pool_pre_ping": True}
        if resolved_url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in resolved_url:
                kwargs["poolclass"] = StaticPool
        if _ENGINE is not None:
            _ENGINE.dispose()
        _ENGINE = create_engine(resolved_url, **kwargs)
        _ENGINE_URL = resolved_url
        if resolved_url.startswith("sqlite"):
            event.listen(_ENGINE, "connect", _enable_sqlite_foreign_keys)
        logger.info("db_engine_created dialect=%s", _ENGINE.dialect.name)

    return _ENGINE


def connection_dependency() -> Generator[Connection, None, None]:
    """FastAPI dependency yielding a transactional connection.

    The transaction commits when the request handler returns and rolls back
    when it raises, so each write operation is a single atomic unit.
    """
    engine = get_engine()
    with engine.connect() as conn:
        trans = conn.begin()
        try:
            yield conn
            trans.commit()
        except Exception:
            trans.rollback()
            logger.info("db_transaction_rolled_back", exc_info=True)
            raise

