from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class GroupingStrategy(str, Enum):
    ALLOW_SMALLER = "allow-smaller"
    DISTRIBUTE = "distribute"


class InvalidGroupingOptions(ValueError):
    """Raised when a group size or leftover strategy cannot be used."""


@dataclass(frozen=True)
class GroupingOptions:
    group_size: int
    strategy: GroupingStrategy = GroupingStrategy.ALLOW_SMALLER

    def __post_init__(self) -> None:
        if isinstance(self.group_size, bool) or not isinstance(self.group_size, int):
            raise InvalidGroupingOptions(f"group_size must be an integer, got {self.group_size!r}")
        if self.group_size < 1:
            raise InvalidGroupingOptions("group_size must be at least 1")
        try:
            strategy = GroupingStrategy(self.strategy)
        except ValueError:
            raise InvalidGroupingOptions(f"Unknown grouping strategy: {self.strategy!r}") from None
        # frozen dataclass, so bypass __setattr__ to store the coerced enum
        object.__setattr__(self, "strategy", strategy)


@dataclass(frozen=True)
class GroupAssignment:
    groups: tuple[tuple[str, ...], ...] = ()
    remaining_count: int = 0

    @property
    def member_count(self) -> int:
        return sum(len(g) for g in self.groups)

    def flatten(self) -> list[str]:
        return [name for group in self.groups for name in group]

    def to_text(self) -> str:
        return "\n\n".join(
            f"Group {i}:\n" + "\n".join(group) for i, group in enumerate(self.groups, start=1)
        )


def partition(
    names: Sequence[str],
    options: GroupingOptions,
    *,
    rng: Optional[random.Random] = None,
) -> GroupAssignment:
    """Shuffle ``names`` and cut them into groups of ``options.group_size``.

    Leftovers either form one smaller trailing group (``allow-smaller``) or
    are dealt round-robin onto the full groups (``distribute``). When there
    is no full group to deal onto, everybody lands in a single group.
    """
    roster = list(names)
    if not roster:
        return GroupAssignment()

    rng = rng or random.Random()
    rng.shuffle(roster)

    group_size = options.group_size
    full_group_count = len(roster) // group_size
    remainder = len(roster) % group_size

    groups: list[list[str]] = []
    idx = 0
    for _ in range(full_group_count):
        groups.append(roster[idx : idx + group_size])
        idx += group_size

    if remainder:
        leftover = roster[idx:]
        if options.strategy is GroupingStrategy.ALLOW_SMALLER or not groups:
            groups.append(leftover)
        else:
            for i, name in enumerate(leftover):
                groups[i % len(groups)].append(name)

    return GroupAssignment(
        groups=tuple(tuple(g) for g in groups),
        remaining_count=remainder,
    )
