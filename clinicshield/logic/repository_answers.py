"""Answer data access helpers.

Answers are keyed by (assessment_id, evidence_item_id): created on the first
save for a pair and updated in place afterwards, never duplicated.
"""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection

_COLUMNS = (
    "answer_id, assessment_id, evidence_item_id, yes_no_value, text_value, "
    "file_id, comments, updated_by, updated_at"
)

# Only these columns may be written by an answer save.
_VALUE_COLUMNS = {"yes_no_value", "text_value"}


def get_answer(conn: Connection, assessment_id: str, evidence_item_id: str) -> Optional[dict]:
    row = conn.execute(
        sql_text(
            f"SELECT {_COLUMNS} FROM answers "
            "WHERE assessment_id = :assessment_id AND evidence_item_id = :item_id"
        ),
        {"assessment_id": assessment_id, "item_id": evidence_item_id},
    ).mappings().first()
    return dict(row) if row else None


def list_answers_for_assessment(conn: Connection, assessment_id: str) -> list[dict]:
    rows = conn.execute(
        sql_text(f"SELECT {_COLUMNS} FROM answers WHERE assessment_id = :assessment_id"),
        {"assessment_id": assessment_id},
    ).mappings().all()
    return [dict(r) for r in rows]


def upsert_answer_value(
    conn: Connection,
    *,
    assessment_id: str,
    evidence_item_id: str,
    column: str,
    value: str,
    updated_by: str,
    now_ms: float,
) -> str:
    """Write a single value column for the pair; return 'created' or 'updated'."""
    if column not in _VALUE_COLUMNS:
        raise ValueError(f"unsupported answer column: {column}")
    existing = get_answer(conn, assessment_id, evidence_item_id)
    params = {"value": value, "updated_by": updated_by, "now": now_ms}
    if existing:
        conn.execute(
            sql_text(
                f"UPDATE answers SET {column} = :value, updated_by = :updated_by, updated_at = :now "
                "WHERE answer_id = :answer_id"
            ),
            {**params, "answer_id": existing["answer_id"]},
        )
        return "updated"
    conn.execute(
        sql_text(
            f"""
            INSERT INTO answers (answer_id, assessment_id, evidence_item_id, {column}, updated_by, updated_at)
            VALUES (:answer_id, :assessment_id, :item_id, :value, :updated_by, :now)
            """
        ),
        {
            **params,
            "answer_id": str(uuid.uuid4()),
            "assessment_id": assessment_id,
            "item_id": evidence_item_id,
        },
    )
    return "created"


__all__ = ["get_answer", "list_answers_for_assessment", "upsert_answer_value"]
