from __future__ import annotations

import random
from collections import Counter

import pytest

from app.grouping import (
    GroupAssignment,
    GroupingOptions,
    GroupingStrategy,
    InvalidGroupingOptions,
    partition,
)

NAMES = ["A", "B", "C", "D", "E", "F", "G"]


def _sizes(assignment: GroupAssignment) -> list[int]:
    return sorted(len(g) for g in assignment.groups)


def test_partition_empty_roster_returns_empty_assignment():
    result = partition([], GroupingOptions(group_size=3))
    assert result.groups == ()
    assert result.remaining_count == 0
    assert result.member_count == 0


def test_partition_allow_smaller_appends_short_group():
    result = partition(NAMES, GroupingOptions(group_size=3, strategy=GroupingStrategy.ALLOW_SMALLER))
    assert [len(g) for g in result.groups] == [3, 3, 1]
    assert result.remaining_count == 1
    assert result.member_count == 7
    assert sorted(result.flatten()) == NAMES


def test_partition_distribute_spreads_leftover():
    result = partition(NAMES, GroupingOptions(group_size=3, strategy=GroupingStrategy.DISTRIBUTE))
    assert len(result.groups) == 2
    assert _sizes(result) == [3, 4]
    # leftovers are dealt from the first group on
    assert len(result.groups[0]) == 4
    assert sorted(result.flatten()) == NAMES


def test_partition_distribute_without_full_group_falls_back_to_single_group():
    result = partition(["A", "B"], GroupingOptions(group_size=5, strategy="distribute"))
    assert len(result.groups) == 1
    assert sorted(result.groups[0]) == ["A", "B"]
    assert result.remaining_count == 2


def test_partition_allow_smaller_with_fewer_names_than_group_size():
    result = partition(["A", "B"], GroupingOptions(group_size=5))
    assert len(result.groups) == 1
    assert sorted(result.groups[0]) == ["A", "B"]


def test_partition_distribute_wraps_when_leftover_outnumbers_groups():
    names = [f"s{i}" for i in range(7)]
    result = partition(names, GroupingOptions(group_size=5, strategy="distribute"))
    assert len(result.groups) == 1
    assert sorted(result.flatten()) == sorted(names)


def test_partition_group_size_one_puts_everybody_alone():
    result = partition(NAMES, GroupingOptions(group_size=1, strategy="distribute"))
    assert len(result.groups) == 7
    assert all(len(g) == 1 for g in result.groups)


@pytest.mark.parametrize("strategy", list(GroupingStrategy))
def test_partition_keeps_every_name_exactly_once(strategy):
    rng = random.Random(7)
    for n in range(1, 30):
        names = [f"s{i}" for i in range(n)] + ["dup", "dup"]
        for k in range(1, 7):
            result = partition(names, GroupingOptions(group_size=k, strategy=strategy), rng=rng)
            assert Counter(result.flatten()) == Counter(names)


def test_partition_allow_smaller_shape():
    for n in range(1, 30):
        names = [f"s{i}" for i in range(n)]
        for k in range(1, 7):
            groups = partition(names, GroupingOptions(group_size=k)).groups
            assert all(len(g) == k for g in groups[:-1])
            assert len(groups[-1]) == (n % k or k)
            assert len(groups) == n // k + (1 if n % k else 0)


def test_partition_distribute_shape():
    for n in range(1, 30):
        names = [f"s{i}" for i in range(n)]
        for k in range(1, 7):
            if n % k > n // k:
                continue
            groups = partition(names, GroupingOptions(group_size=k, strategy="distribute")).groups
            assert len(groups) == n // k
            assert all(len(g) in (k, k + 1) for g in groups)
            assert sum(1 for g in groups if len(g) == k + 1) == n % k


def test_partition_shape_is_stable_across_calls():
    names = [f"s{i}" for i in range(17)]
    options = GroupingOptions(group_size=4, strategy="distribute")
    shapes = {tuple(len(g) for g in partition(names, options).groups) for _ in range(20)}
    assert len(shapes) == 1


def test_partition_is_deterministic_with_seeded_rng():
    names = [f"s{i}" for i in range(11)]
    options = GroupingOptions(group_size=3)
    g1 = partition(names, options, rng=random.Random(123))
    g2 = partition(names, options, rng=random.Random(123))
    assert g1 == g2


def test_partition_reshuffles_between_calls():
    names = [f"s{i}" for i in range(20)]
    options = GroupingOptions(group_size=4)
    g1 = partition(names, options, rng=random.Random(1))
    g2 = partition(names, options, rng=random.Random(2))
    assert g1.groups != g2.groups


def test_partition_does_not_mutate_input():
    names = list(NAMES)
    partition(names, GroupingOptions(group_size=2), rng=random.Random(5))
    assert names == NAMES


@pytest.mark.parametrize("group_size", [0, -1, True, 2.5, "3"])
def test_grouping_options_rejects_invalid_group_size(group_size):
    with pytest.raises(InvalidGroupingOptions):
        GroupingOptions(group_size=group_size)


def test_grouping_options_rejects_unknown_strategy():
    with pytest.raises(InvalidGroupingOptions):
        GroupingOptions(group_size=3, strategy="biggest-first")


def test_grouping_options_coerces_strategy_string():
    options = GroupingOptions(group_size=3, strategy="distribute")
    assert options.strategy is GroupingStrategy.DISTRIBUTE


def test_assignment_to_text():
    assignment = GroupAssignment(groups=(("A", "B"), ("C",)), remaining_count=1)
    assert assignment.to_text() == "Group 1:\nA\nB\n\nGroup 2:\nC"
    assert GroupAssignment().to_text() == ""
