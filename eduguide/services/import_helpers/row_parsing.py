# /eduguide/services/import_helpers/row_parsing.py

"""
Specialist helpers that turn one raw CSV row into a validated student record.

A row is a dictionary of column name to raw value, as produced by pandas. Every
problem found here raises `RowRejected`, whose message is the exact text that
ends up in the import summary.
"""

import uuid
from typing import Any, Dict, List, Optional

import pandas as pd

from ...models.student_model import AGE_MIN, AGE_MAX, SEL_MIN, SEL_MAX

REQUIRED_COLUMNS = ("name", "teacherEmail")
SEL_COLUMNS = ("empathy", "regulation", "cooperation")
DEFAULT_CLASS_NAME = "Unassigned"


class RowRejected(ValueError):
    """A single CSV row could not be turned into a student."""


def clean_value(value: Any) -> Optional[str]:
    """Returns the stripped text of a cell, or None for absent and empty cells."""
    if value is None:
        return None
    if not isinstance(value, str):
        if pd.isna(value):
            return None
        value = str(value)
    value = value.strip()
    return value or None


def missing_required_fields(row: Dict[str, Any]) -> List[str]:
    return [column for column in REQUIRED_COLUMNS if clean_value(row.get(column)) is None]


def parse_bounded_int(raw: Optional[str], field: str, low: int, high: int, student_name: str) -> Optional[int]:
    """
    Parses an optional whole number in [low, high]. Spreadsheet exports such as
    "8.0" are accepted; anything else is rejected.
    """
    if raw is None:
        return None
    try:
        number = int(raw)
    except ValueError:
        try:
            as_float = float(raw)
        except ValueError:
            as_float = None
        if as_float is None or not as_float.is_integer():
            raise RowRejected(
                f"Invalid {field} '{raw}' for student {student_name}: expected a whole number between {low} and {high}"
            )
        number = int(as_float)

    if not low <= number <= high:
        raise RowRejected(
            f"Invalid {field} '{raw}' for student {student_name}: expected a whole number between {low} and {high}"
        )
    return number


def build_student_record(row: Dict[str, Any], name: str, teacher_id: str) -> Dict[str, Any]:
    """
    Builds the database record for a new student owned by `teacher_id`.
    Optional columns that are absent or empty are stored as NULL, not zero.
    """
    record = {
        "id": f"stu_{uuid.uuid4().hex[:12]}",
        "name": name,
        "teacher_id": teacher_id,
        "age": parse_bounded_int(clean_value(row.get("age")), "age", AGE_MIN, AGE_MAX, name),
        "class_name": clean_value(row.get("class")) or DEFAULT_CLASS_NAME,
    }
    for column in SEL_COLUMNS:
        record[column] = parse_bounded_int(clean_value(row.get(column)), column, SEL_MIN, SEL_MAX, name)
    return record
