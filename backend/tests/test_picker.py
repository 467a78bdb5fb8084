from __future__ import annotations

import random

from app.grouping import GroupAssignment, Picker, PickerState


def _assignment(*groups: tuple[str, ...]) -> GroupAssignment:
    return GroupAssignment(groups=tuple(groups))


def test_pick_without_assignment_returns_none():
    picker = Picker(rng=random.Random(1))
    assert picker.pick() is None
    assert picker.state is PickerState.UNSEEDED
    assert picker.last_pick is None


def test_pick_exhausts_pool_without_repeats_then_reseeds():
    picker = Picker(rng=random.Random(2))
    picker.on_new_assignment(_assignment(("A", "B"), ("C",)))
    assert picker.state is PickerState.SEEDED

    results = [picker.pick() for _ in range(3)]
    assert sorted(r.name for r in results) == ["A", "B", "C"]
    assert [r.remaining for r in results] == [2, 1, 0]
    assert picker.state is PickerState.EXHAUSTED

    fourth = picker.pick()
    assert fourth.name in {"A", "B", "C"}
    assert fourth.remaining == 2
    assert picker.state is PickerState.SEEDED


def test_every_round_covers_the_whole_assignment():
    names = [f"s{i}" for i in range(10)]
    picker = Picker(rng=random.Random(3))
    picker.on_new_assignment(_assignment(tuple(names[:4]), tuple(names[4:])))
    for _ in range(3):
        drawn = [picker.pick().name for _ in range(len(names))]
        assert sorted(drawn) == sorted(names)


def test_duplicate_names_stay_separate_entries():
    picker = Picker(rng=random.Random(4))
    picker.on_new_assignment(_assignment(("Sam", "Sam"), ("Alex",)))
    drawn = [picker.pick().name for _ in range(3)]
    assert sorted(drawn) == ["Alex", "Sam", "Sam"]


def test_new_assignment_abandons_current_round():
    picker = Picker(rng=random.Random(5))
    picker.on_new_assignment(_assignment(("A", "B", "C")))
    picker.pick()
    assert picker.last_pick is not None

    picker.on_new_assignment(_assignment(("X", "Y")))
    assert picker.last_pick is None
    assert picker.remaining == 2
    drawn = [picker.pick().name for _ in range(2)]
    assert sorted(drawn) == ["X", "Y"]


def test_single_member_assignment_repeats_every_pick():
    picker = Picker(rng=random.Random(6))
    picker.on_new_assignment(_assignment(("Solo",)))
    for _ in range(3):
        result = picker.pick()
        assert result.name == "Solo"
        assert result.remaining == 0
        assert picker.state is PickerState.EXHAUSTED


def test_empty_assignment_has_nothing_to_pick():
    picker = Picker(rng=random.Random(7))
    picker.on_new_assignment(GroupAssignment())
    assert picker.pick() is None
    assert picker.remaining == 0


def test_seeded_picker_is_reproducible():
    assignment = _assignment(("A", "B", "C"), ("D", "E"))
    p1 = Picker(rng=random.Random(42))
    p2 = Picker(rng=random.Random(42))
    p1.on_new_assignment(assignment)
    p2.on_new_assignment(assignment)
    assert [p1.pick() for _ in range(8)] == [p2.pick() for _ in range(8)]


def test_reset_returns_to_unseeded():
    picker = Picker(rng=random.Random(8))
    picker.on_new_assignment(_assignment(("A",)))
    picker.pick()
    picker.reset()
    assert picker.state is PickerState.UNSEEDED
    assert picker.pick() is None
