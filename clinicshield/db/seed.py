"""Seed the database with the DSPT v8 GP (Category 4) reference catalog.

Run once after migrations:

    python -m clinicshield.db.seed

Seeding is idempotent: when any standard already exists the catalog is left
untouched and nothing is written.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.engine import Engine

from clinicshield.config import DEFAULT_CATALOG_PATH
from clinicshield.logic import repository_catalog
from clinicshield.models.catalog import Catalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedResult:
    seeded: bool
    standards: int = 0
    assertions: int = 0
    evidence_items: int = 0
    message: str = ""


def load_catalog(path: str | Path | None = None) -> Catalog:
    """Read and validate the reference catalog JSON file."""
    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    try:
        raw = json.loads(catalog_path.read_text(encoding="utf-8"))
        return Catalog.model_validate(raw)
    except (OSError, json.JSONDecodeError, PydanticValidationError):
        logger.error("catalog_load_failed path=%s", catalog_path, exc_info=True)
        raise


def seed_catalog(engine: Engine, catalog: Catalog | None = None) -> SeedResult:
    """Insert standards, assertions and evidence items in a single transaction."""
    catalog = catalog or load_catalog()
    with engine.begin() as conn:
        if repository_catalog.any_standard_exists(conn):
            logger.info("catalog_seed_skipped reason=already_seeded")
            return SeedResult(seeded=False, message="Already seeded")

        standard_count = assertion_count = item_count = 0
        for standard in catalog.standards:
            standard_id = repository_catalog.insert_standard(
                conn, number=standard.number, title=standard.title, description=standard.description
            )
            standard_count += 1
            for assertion in standard.assertions:
                assertion_id = repository_catalog.insert_assertion(
                    conn, ref=assertion.ref, title=assertion.title, standard_id=standard_id
                )
                assertion_count += 1
                for item in assertion.evidence_items:
                    repository_catalog.insert_evidence_item(
                        conn,
                        ref=item.ref,
                        assertion_id=assertion_id,
                        standard_id=standard_id,
                        input_type=item.input_type.value,
                        evidence_text=item.evidence_text,
                        tooltip=item.tooltip,
                        plain_english_question=item.plain_english_question,
                        clinic_help=item.clinic_help,
                        mandatory=item.mandatory,
                        approaching_mandatory=item.approaching_mandatory,
                        exemptions=[e.value for e in item.exemptions],
                        change_from_v7=item.change_from_v7,
                        new_in_v8=item.new_in_v8,
                    )
                    item_count += 1

    logger.info(
        "catalog_seeded standards=%d assertions=%d evidence_items=%d",
        standard_count,
        assertion_count,
        item_count,
    )
    return SeedResult(
        seeded=True,
        standards=standard_count,
        assertions=assertion_count,
        evidence_items=item_count,
    )


def main() -> None:
    from clinicshield.config import load_config
    from clinicshield.db.base import get_engine
    from clinicshield.db.migrations_runner import apply_migrations
    from clinicshield.logging_setup import configure_logging

    configure_logging()
    cfg = load_config()
    engine = get_engine(cfg.database.dsn)
    apply_migrations(engine)
    result = seed_catalog(engine, load_catalog(cfg.catalog.path))
    logger.info("catalog_seed_result %s", result)


if __name__ == "__main__":
    main()
