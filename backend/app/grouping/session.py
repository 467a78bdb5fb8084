from __future__ import annotations

import logging
import random
from typing import Any, Callable, Iterable, Optional

from app.grouping.partitioner import GroupAssignment, GroupingOptions, GroupingStrategy, partition
from app.grouping.picker import Picker, PickResult
from app.grouping.roster import list_present_student_names

logger = logging.getLogger(__name__)


class ClassSession:
    """
    Grouping state for one class: attendance, options, the current
    assignment and the picker drawing from it.

    Each user action maps to one method. Generating (or regenerating)
    replaces the assignment and reseeds the picker; removing a student
    discards the assignment altogether.
    """

    def __init__(
        self,
        class_id: str,
        options: Optional[GroupingOptions] = None,
        rng: Optional[random.Random] = None,
    ):
        self.class_id = class_id
        self._rng = rng or random.Random()
        self._options = options or GroupingOptions(group_size=3)
        self._absent_ids: set[str] = set()
        self._assignment: Optional[GroupAssignment] = None
        self._picker = Picker(rng=self._rng)

    @property
    def options(self) -> GroupingOptions:
        return self._options

    @property
    def absent_ids(self) -> frozenset[str]:
        return frozenset(self._absent_ids)

    @property
    def assignment(self) -> Optional[GroupAssignment]:
        return self._assignment

    @property
    def picker(self) -> Picker:
        return self._picker

    @property
    def last_pick(self) -> Optional[str]:
        return self._picker.last_pick

    def configure(self, group_size: int, strategy: GroupingStrategy | str) -> GroupingOptions:
        self._options = GroupingOptions(group_size=group_size, strategy=strategy)
        return self._options

    def is_absent(self, student_id: str) -> bool:
        return student_id in self._absent_ids

    def set_absent(self, student_id: str, absent: bool) -> None:
        if absent:
            self._absent_ids.add(student_id)
        else:
            self._absent_ids.discard(student_id)

    def toggle_absent(self, student_id: str) -> bool:
        absent = student_id not in self._absent_ids
        self.set_absent(student_id, absent)
        return absent

    def forget_student(self, student_id: str) -> None:
        self._absent_ids.discard(student_id)
        self.clear_groups()

    def generate(self, students: Iterable[Any]) -> GroupAssignment:
        names = list_present_student_names(students, self._absent_ids)
        assignment = partition(names, self._options, rng=self._rng)
        self._assignment = assignment
        self._picker.on_new_assignment(assignment)
        logger.info(
            f"Groups generated: class={self.class_id}, students={len(names)}, "
            f"groups={len(assignment.groups)}, group_size={self._options.group_size}, "
            f"strategy={self._options.strategy.value}"
        )
        return assignment

    def regenerate(self, students: Iterable[Any]) -> GroupAssignment:
        return self.generate(students)

    def pick(self) -> Optional[PickResult]:
        return self._picker.pick()

    def clear_groups(self) -> None:
        self._assignment = None
        self._picker.reset()


class SessionRegistry:
    def __init__(
        self,
        default_options: Callable[[], GroupingOptions] | None = None,
        rng_factory: Callable[[], random.Random] | None = None,
    ):
        self._sessions: dict[str, ClassSession] = {}
        self._default_options = default_options or (lambda: GroupingOptions(group_size=3))
        self._rng_factory = rng_factory or random.Random

    def get(self, class_id: str) -> ClassSession:
        session = self._sessions.get(class_id)
        if session is None:
            session = ClassSession(
                class_id,
                options=self._default_options(),
                rng=self._rng_factory(),
            )
            self._sessions[class_id] = session
        return session

    def peek(self, class_id: str) -> Optional[ClassSession]:
        return self._sessions.get(class_id)

    def drop(self, class_id: str) -> None:
        self._sessions.pop(class_id, None)

    def clear(self) -> None:
        self._sessions.clear()

    def __contains__(self, class_id: str) -> bool:
        return class_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
