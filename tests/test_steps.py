"""
tests/test_steps.py - Step event value objects.
"""

import dataclasses

import pytest

from sortviz.steps import STEP_TYPES, Compare, Completed, MarkSorted, Merge, Swap, replay


class TestStepValues:

    def test_keyword_construction(self):
        assert Compare(i=0, j=1) == Compare(0, 1)
        assert Merge(i=2, value="x") == Merge(2, "x")
        assert MarkSorted(i=3).indices == (3,)

    def test_equality_includes_type(self):
        assert Compare(0, 1) != Swap(0, 1)
        assert MarkSorted(0) != Merge(0, 0)
        assert Completed() == Completed()

    def test_immutable(self):
        step = Swap(0, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            step.i = 5

    def test_hashable(self):
        assert len({Compare(0, 1), Compare(0, 1), Swap(0, 1)}) == 2

    def test_indices(self):
        assert Compare(1, 4).indices == (1, 4)
        assert Merge(2, 9).indices == (2,)
        assert Completed().indices == ()

    def test_closed_set(self):
        assert STEP_TYPES == (Compare, Swap, Merge, MarkSorted, Completed)


class TestReplay:

    def test_applies_swaps_and_merges_only(self):
        events = [Compare(0, 1), Swap(0, 1), Merge(2, 7), MarkSorted(2), Completed()]
        assert replay([1, 2, 3], events) == [2, 1, 7]

    def test_leaves_input_untouched(self):
        data = [3, 1]
        replay(data, [Swap(0, 1)])
        assert data == [3, 1]
