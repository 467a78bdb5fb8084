from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Collection, Iterable


def _student_id(student: Any) -> str:
    if isinstance(student, Mapping):
        value = student.get("id", student.get("_id"))
    else:
        value = getattr(student, "id")
    return str(value)


def _student_name(student: Any) -> str:
    if isinstance(student, Mapping):
        return student["full_name"]
    return student.full_name


def list_present_student_names(students: Iterable[Any], absent_ids: Collection[str]) -> list[str]:
    """Names of the students not marked absent, in roster order."""
    return [_student_name(s) for s in students if _student_id(s) not in absent_ids]
