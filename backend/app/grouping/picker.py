from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from app.grouping.partitioner import GroupAssignment

logger = logging.getLogger(__name__)


class PickerState(str, Enum):
    UNSEEDED = "unseeded"
    SEEDED = "seeded"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class PickResult:
    name: str
    remaining: int


class Picker:
    """
    Random student picker that never repeats a student within a round.

    The pool is seeded from the flattened group assignment. Every pick
    removes one entry; once the pool is empty the next pick silently
    starts a new round over the same assignment. Entries are opaque
    tokens, so two students sharing a display name stay two entries.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._assignment: Optional[GroupAssignment] = None
        self._pool: list[str] = []
        self._last_pick: Optional[str] = None

    @property
    def state(self) -> PickerState:
        if self._assignment is None:
            return PickerState.UNSEEDED
        return PickerState.SEEDED if self._pool else PickerState.EXHAUSTED

    @property
    def remaining(self) -> int:
        return len(self._pool)

    @property
    def last_pick(self) -> Optional[str]:
        return self._last_pick

    def on_new_assignment(self, assignment: GroupAssignment) -> None:
        self._assignment = assignment
        self._pool = assignment.flatten()
        self._last_pick = None

    def reset(self) -> None:
        self._assignment = None
        self._pool = []
        self._last_pick = None

    def pick(self) -> Optional[PickResult]:
        if self._assignment is None:
            return None

        if not self._pool:
            pool = self._assignment.flatten()
            if not pool:
                return None
            logger.debug(f"Pick pool exhausted, starting a new round of {len(pool)}")
            self._pool = pool

        chosen = self._pool.pop(self._rng.randrange(len(self._pool)))
        self._last_pick = chosen
        return PickResult(name=chosen, remaining=len(self._pool))
