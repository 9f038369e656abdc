"""Assessment data access helpers."""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection

from clinicshield.models.enums import AssessmentStatus

_COLUMNS = "assessment_id, organisation_id, dspt_year, status, completion_percent, last_activity_at"


def insert_assessment(conn: Connection, *, organisation_id: str, dspt_year: str, now_ms: float) -> str:
    assessment_id = str(uuid.uuid4())
    conn.execute(
        sql_text(
            """
            INSERT INTO assessments
                (assessment_id, organisation_id, dspt_year, status, completion_percent, last_activity_at)
            VALUES (:assessment_id, :org, :year, :status, 0, :now)
            """
        ),
        {
            "assessment_id": assessment_id,
            "org": organisation_id,
            "year": dspt_year,
            "status": AssessmentStatus.IN_PROGRESS.value,
            "now": now_ms,
        },
    )
    return assessment_id


def get_assessment(conn: Connection, assessment_id: str) -> Optional[dict]:
    row = conn.execute(
        sql_text(f"SELECT {_COLUMNS} FROM assessments WHERE assessment_id = :id"),
        {"id": assessment_id},
    ).mappings().first()
    return dict(row) if row else None


def get_assessment_for_year(conn: Connection, organisation_id: str, dspt_year: str) -> Optional[dict]:
    row = conn.execute(
        sql_text(f"SELECT {_COLUMNS} FROM assessments WHERE organisation_id = :org AND dspt_year = :year"),
        {"org": organisation_id, "year": dspt_year},
    ).mappings().first()
    return dict(row) if row else None


def touch_assessment(conn: Connection, assessment_id: str, now_ms: float) -> bool:
    """Bump last_activity_at, taking the row's write lock for the transaction.

    Concurrent saves against one assessment queue behind this lock, so the
    completion percentage recomputed afterwards always sees every committed
    answer. Returns False when the assessment does not exist.
    """
    result = conn.execute(
        sql_text("UPDATE assessments SET last_activity_at = :now WHERE assessment_id = :id"),
        {"now": now_ms, "id": assessment_id},
    )
    return result.rowcount > 0


def update_completion_percent(conn: Connection, assessment_id: str, completion_percent: float, now_ms: float) -> None:
    conn.execute(
        sql_text(
            """
            UPDATE assessments
            SET completion_percent = :pct, last_activity_at = :now
            WHERE assessment_id = :id
            """
        ),
        {"pct": completion_percent, "now": now_ms, "id": assessment_id},
    )


__all__ = [
    "insert_assessment",
    "get_assessment",
    "get_assessment_for_year",
    "touch_assessment",
    "update_completion_percent",
]
