"""Organisation and user data access helpers.

Encapsulates queries and writes for onboarding so handlers stay free of
inline SQL.
"""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection

from clinicshield.models.enums import OrganisationType, UserRole


def _organisation_row(row) -> dict:  # type: ignore[no-untyped-def]
    org = dict(row)
    org["onboarding_complete"] = bool(org["onboarding_complete"])
    org["type"] = org.pop("org_type")
    return org


def get_user_by_subject(conn: Connection, subject: str) -> Optional[dict]:
    row = conn.execute(
        sql_text(
            "SELECT user_id, subject, email, name, organisation_id, role FROM users WHERE subject = :subject"
        ),
        {"subject": subject},
    ).mappings().first()
    return dict(row) if row else None


def insert_user(
    conn: Connection,
    *,
    subject: str,
    email: str,
    name: Optional[str],
    organisation_id: Optional[str],
    role: UserRole = UserRole.PRACTICE_MANAGER,
) -> str:
    user_id = str(uuid.uuid4())
    conn.execute(
        sql_text(
            """
            INSERT INTO users (user_id, subject, email, name, organisation_id, role)
            VALUES (:user_id, :subject, :email, :name, :organisation_id, :role)
            """
        ),
        {
            "user_id": user_id,
            "subject": subject,
            "email": email,
            "name": name,
            "organisation_id": organisation_id,
            "role": role.value,
        },
    )
    return user_id


def set_user_organisation(conn: Connection, user_id: str, organisation_id: str) -> None:
    conn.execute(
        sql_text("UPDATE users SET organisation_id = :org WHERE user_id = :user_id"),
        {"org": organisation_id, "user_id": user_id},
    )


def insert_organisation(
    conn: Connection,
    *,
    name: str,
    org_type: OrganisationType,
    ods_code: Optional[str],
    staff_count: Optional[int],
    created_by: str,
) -> str:
    organisation_id = str(uuid.uuid4())
    conn.execute(
        sql_text(
            """
            INSERT INTO organisations
                (organisation_id, name, org_type, ods_code, staff_count, onboarding_complete, created_by)
            VALUES
                (:organisation_id, :name, :org_type, :ods_code, :staff_count, :onboarding_complete, :created_by)
            """
        ),
        {
            "organisation_id": organisation_id,
            "name": name,
            "org_type": org_type.value,
            "ods_code": ods_code,
            "staff_count": staff_count,
            "onboarding_complete": True,
            "created_by": created_by,
        },
    )
    return organisation_id


def get_organisation(conn: Connection, organisation_id: str) -> Optional[dict]:
    row = conn.execute(
        sql_text(
            """
            SELECT organisation_id, name, org_type, ods_code, ico_registration_number,
                   staff_count, onboarding_complete, created_by
            FROM organisations
            WHERE organisation_id = :org
            """
        ),
        {"org": organisation_id},
    ).mappings().first()
    return _organisation_row(row) if row else None


__all__ = [
    "get_user_by_subject",
    "insert_user",
    "set_user_organisation",
    "insert_organisation",
    "get_organisation",
]
