"""DSPT catalog data access helpers (standards, assertions, evidence items)."""

from __future__ import annotations

import json
import uuid
from typing import Iterable, Optional

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection

_ITEM_COLUMNS = (
    "evidence_item_id, ref, assertion_id, standard_id, input_type, evidence_text, tooltip, "
    "plain_english_question, clinic_help, mandatory, approaching_mandatory, exemptions, "
    "change_from_v7, new_in_v8"
)


def _item_row(row) -> dict:  # type: ignore[no-untyped-def]
    item = dict(row)
    for key in ("mandatory", "approaching_mandatory", "new_in_v8"):
        item[key] = bool(item[key])
    item["exemptions"] = json.loads(item.get("exemptions") or "[]")
    return item


def any_standard_exists(conn: Connection) -> bool:
    return conn.execute(sql_text("SELECT 1 FROM standards LIMIT 1")).first() is not None


def list_standards(conn: Connection) -> list[dict]:
    rows = conn.execute(
        sql_text("SELECT standard_id, number, title, description FROM standards ORDER BY number ASC")
    ).mappings().all()
    return [dict(r) for r in rows]


def list_evidence_items(conn: Connection) -> list[dict]:
    rows = conn.execute(sql_text(f"SELECT {_ITEM_COLUMNS} FROM evidence_items")).mappings().all()
    return [_item_row(r) for r in rows]


def count_evidence_items(conn: Connection) -> int:
    return int(conn.execute(sql_text("SELECT COUNT(*) FROM evidence_items")).scalar() or 0)


def get_evidence_item(conn: Connection, evidence_item_id: str) -> Optional[dict]:
    row = conn.execute(
        sql_text(f"SELECT {_ITEM_COLUMNS} FROM evidence_items WHERE evidence_item_id = :id"),
        {"id": evidence_item_id},
    ).mappings().first()
    return _item_row(row) if row else None


def get_evidence_item_by_ref(conn: Connection, ref: str) -> Optional[dict]:
    row = conn.execute(
        sql_text(f"SELECT {_ITEM_COLUMNS} FROM evidence_items WHERE ref = :ref"),
        {"ref": ref},
    ).mappings().first()
    return _item_row(row) if row else None


def insert_standard(conn: Connection, *, number: int, title: str, description: str) -> str:
    standard_id = str(uuid.uuid4())
    conn.execute(
        sql_text(
            "INSERT INTO standards (standard_id, number, title, description) "
            "VALUES (:id, :number, :title, :description)"
        ),
        {"id": standard_id, "number": number, "title": title, "description": description},
    )
    return standard_id


def insert_assertion(conn: Connection, *, ref: str, title: str, standard_id: str) -> str:
    assertion_id = str(uuid.uuid4())
    conn.execute(
        sql_text(
            "INSERT INTO assertions (assertion_id, ref, title, standard_id) "
            "VALUES (:id, :ref, :title, :standard_id)"
        ),
        {"id": assertion_id, "ref": ref, "title": title, "standard_id": standard_id},
    )
    return assertion_id


def insert_evidence_item(
    conn: Connection,
    *,
    ref: str,
    assertion_id: str,
    standard_id: str,
    input_type: str,
    evidence_text: str,
    tooltip: Optional[str],
    plain_english_question: str,
    clinic_help: str,
    mandatory: bool,
    approaching_mandatory: bool,
    exemptions: Iterable[str],
    change_from_v7: Optional[str],
    new_in_v8: bool,
) -> str:
    evidence_item_id = str(uuid.uuid4())
    conn.execute(
        sql_text(
            """
            INSERT INTO evidence_items
                (evidence_item_id, ref, assertion_id, standard_id, input_type, evidence_text, tooltip,
                 plain_english_question, clinic_help, mandatory, approaching_mandatory, exemptions,
                 change_from_v7, new_in_v8)
            VALUES
                (:id, :ref, :assertion_id, :standard_id, :input_type, :evidence_text, :tooltip,
                 :plain_english_question, :clinic_help, :mandatory, :approaching_mandatory, :exemptions,
                 :change_from_v7, :new_in_v8)
            """
        ),
        {
            "id": evidence_item_id,
            "ref": ref,
            "assertion_id": assertion_id,
            "standard_id": standard_id,
            "input_type": input_type,
            "evidence_text": evidence_text,
            "tooltip": tooltip,
            "plain_english_question": plain_english_question,
            "clinic_help": clinic_help,
            "mandatory": bool(mandatory),
            "approaching_mandatory": bool(approaching_mandatory),
            "exemptions": json.dumps(list(exemptions)),
            "change_from_v7": change_from_v7,
            "new_in_v8": bool(new_in_v8),
        },
    )
    return evidence_item_id


__all__ = [
    "any_standard_exists",
    "list_standards",
    "list_evidence_items",
    "count_evidence_items",
    "get_evidence_item",
    "get_evidence_item_by_ref",
    "insert_standard",
    "insert_assertion",
    "insert_evidence_item",
]
