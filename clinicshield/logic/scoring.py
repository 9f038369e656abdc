"""Completion scoring for DSPT assessments.

Pure helpers shared by the save path and the read-state view so that both
sides agree on what counts as an answered evidence item. Nothing here touches
the database; every input shape is accepted and none of these functions raise.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any, Iterable, Optional

YES_NO_VALUES = ("yes", "no", "partial", "not_sure", "not_applicable")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Accepted spellings per answer field: persisted columns first, then the
# camelCase keys used by API payloads.
_FIELD_ALIASES = {
    "yes_no_value": ("yes_no_value", "yesNoValue"),
    "text_value": ("text_value", "textValue"),
    "file_id": ("file_id", "fileId"),
}


def _field(answer: Any, name: str) -> Any:
    """Read an answer field from a mapping, row or plain object."""
    if answer is None:
        return None
    for key in _FIELD_ALIASES[name]:
        if isinstance(answer, Mapping):
            if key in answer:
                return answer[key]
            continue
        mapping = getattr(answer, "_mapping", None)
        if mapping is not None:
            if key in mapping:
                return mapping[key]
            continue
        value = getattr(answer, key, None)
        if value is not None:
            return value
    return None


def is_answer_filled(answer: Any) -> bool:
    """Return True when any one of the answer's fields carries a value.

    - yes/no: any of the five values counts, including ``not_applicable``
    - text: counts once stripped of surrounding whitespace it is non-empty
    - file: any non-empty file reference counts
    """
    yes_no = _field(answer, "yes_no_value")
    if yes_no is not None and str(getattr(yes_no, "value", yes_no)):
        return True
    text = _field(answer, "text_value")
    if text is not None and str(text).strip():
        return True
    file_id = _field(answer, "file_id")
    if file_id is not None and str(file_id):
        return True
    return False


def normalize_text_answer(value: Optional[str]) -> Optional[str]:
    """Strip a free-text answer; whitespace-only or missing input becomes None."""
    normalized = (value or "").strip()
    return normalized if normalized else None


def calculate_completion_percent(total_item_count: Any, answers: Iterable[Any] | None) -> float:
    """Percentage of filled answers over ``total_item_count``, one decimal place.

    Rounds half-up at the tenths digit. Answers are not de-duplicated here;
    callers pass at most one answer per evidence item.
    """
    try:
        total = float(total_item_count)
    except (TypeError, ValueError):
        return 0.0
    if not total > 0:
        return 0.0
    answered = sum(1 for answer in (answers or ()) if is_answer_filled(answer))
    return math.floor((answered / total) * 1000 + 0.5) / 10


def parse_standard_number(value: Any) -> int:
    """Resolve the wizard's ``standard`` parameter, defaulting to standard 1."""
    if value is None or isinstance(value, bool):
        return 1
    if isinstance(value, int):
        return value if value >= 1 else 1
    match = _LEADING_INT.match(str(value))
    if not match:
        return 1
    parsed = int(match.group(1))
    return parsed if parsed >= 1 else 1


__all__ = [
    "YES_NO_VALUES",
    "is_answer_filled",
    "normalize_text_answer",
    "calculate_completion_percent",
    "parse_standard_number",
]
