from __future__ import annotations

import logging
from typing import Optional

from fastapi import HTTPException, status

from app.config import settings
from app.grouping import (
    ClassSession,
    GroupAssignment,
    GroupingOptions,
    GroupingStrategy,
    InvalidGroupingOptions,
    PickResult,
    SessionRegistry,
)

logger = logging.getLogger(__name__)


def _default_options() -> GroupingOptions:
    return GroupingOptions(
        group_size=settings.default_group_size,
        strategy=settings.default_grouping_strategy,
    )


sessions = SessionRegistry(default_options=_default_options)


def serialize_assignment(session: ClassSession) -> dict:
    assignment = session.assignment or GroupAssignment()
    return {
        "class_id": session.class_id,
        "group_size": session.options.group_size,
        "strategy": session.options.strategy,
        "remaining_count": assignment.remaining_count,
        "member_count": assignment.member_count,
        "groups": [
            {"name": f"Group {i}", "members": list(members)}
            for i, members in enumerate(assignment.groups, start=1)
        ],
        "picked": session.last_pick,
    }


def generate_groups_for_class(
    *,
    class_id: str,
    students: list[dict],
    group_size: Optional[int] = None,
    strategy: Optional[GroupingStrategy | str] = None,
) -> ClassSession:
    session = sessions.get(class_id)
    if group_size is not None or strategy is not None:
        try:
            session.configure(
                group_size if group_size is not None else session.options.group_size,
                strategy if strategy is not None else session.options.strategy,
            )
        except InvalidGroupingOptions as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    session.generate(students)
    return session


def regenerate_groups_for_class(*, class_id: str, students: list[dict]) -> ClassSession:
    session = sessions.get(class_id)
    session.regenerate(students)
    return session


def pick_student_for_class(*, class_id: str) -> PickResult:
    session = sessions.peek(class_id)
    result = session.pick() if session is not None else None
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Nothing to pick")
    logger.debug(f"Student picked: class={class_id}, remaining={result.remaining}")
    return result


def groups_text_for_class(*, class_id: str) -> str:
    session = sessions.peek(class_id)
    if session is None or session.assignment is None or not session.assignment.groups:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Groups not found")
    return session.assignment.to_text()


def current_groups_for_class(*, class_id: str) -> dict:
    session = sessions.peek(class_id)
    if session is not None:
        return serialize_assignment(session)

    options = _default_options()
    return {
        "class_id": class_id,
        "group_size": options.group_size,
        "strategy": options.strategy,
        "remaining_count": 0,
        "member_count": 0,
        "groups": [],
        "picked": None,
    }
