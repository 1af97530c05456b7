"""
tests/test_engines.py - Event sequences of the three sorting engines.

Expected sequences were worked out by hand from the algorithms' definitions.
"""

import pytest

from sortviz import engines
from sortviz.runner import run, bubble_sort, quick_sort, merge_sort
from sortviz.steps import Compare, Swap, Merge, MarkSorted, Completed, replay


def count(steps, kind):
    return sum(1 for s in steps if isinstance(s, kind))


class TestBubbleSort:

    def test_sorts_example(self, recorder):
        out = bubble_sort([5, 1, 4, 2, 8], recorder)
        assert out == [1, 2, 4, 5, 8]
        assert replay([5, 1, 4, 2, 8], recorder.steps) == out

    def test_sorted_input_exits_after_one_pass(self, recorder):
        """No swap in the first pass stops the sort."""
        out = bubble_sort([1, 2, 3], recorder)
        assert out == [1, 2, 3]
        assert count(recorder.steps, Swap) == 0
        assert recorder.steps == [Compare(0, 1), Compare(1, 2), MarkSorted(2), Completed()]

    def test_two_elements(self, recorder):
        bubble_sort([2, 1], recorder)
        assert recorder.steps == [
            Compare(0, 1), Swap(0, 1), MarkSorted(1), MarkSorted(0), Completed(),
        ]

    def test_swap_reported_after_mutation(self, recorder):
        bubble_sort([2, 1], recorder)
        assert recorder.snapshots[1] == [1, 2]

    def test_compare_does_not_mutate(self, recorder):
        bubble_sort([3, 1, 2], recorder)
        for step, before, after in zip(recorder.steps[1:], recorder.snapshots, recorder.snapshots[1:]):
            if isinstance(step, Compare):
                assert before == after


class TestQuickSort:

    def test_sorts_example(self, recorder):
        out = quick_sort([3, 6, 2, 9, 1], recorder)
        assert out == [1, 2, 3, 6, 9]
        assert replay([3, 6, 2, 9, 1], recorder.steps) == out

    @pytest.mark.parametrize("data", [[], [7]])
    def test_trivial_inputs_only_complete(self, recorder, data):
        assert quick_sort(data, recorder) == data
        assert recorder.steps == [Completed()]

    def test_two_elements(self, recorder):
        quick_sort([2, 1], recorder)
        assert recorder.steps == [
            Compare(1, 1), Compare(0, 1), Swap(0, 1),
            MarkSorted(0), MarkSorted(1), Completed(),
        ]

    def test_pivot_selection_reported_per_partition(self, recorder):
        quick_sort([3, 6, 2, 9, 1], recorder)
        pivots = [s for s in recorder.steps if isinstance(s, Compare) and s.i == s.j]
        partitions = [s for s in recorder.steps if isinstance(s, Swap)]
        assert len(pivots) >= 1
        assert len(partitions) >= len(pivots)

    def test_every_position_marked(self, recorder):
        quick_sort([3, 6, 2, 9, 1], recorder)
        marked = {s.i for s in recorder.steps if isinstance(s, MarkSorted)}
        assert marked == set(range(5))


class TestMergeSort:

    def test_sorts_duplicates(self, recorder):
        out = merge_sort([4, 2, 4, 1], recorder)
        assert out == [1, 2, 4, 4]

    def test_event_sequence(self, recorder):
        merge_sort([4, 2, 4, 1], recorder)
        assert recorder.steps == [
            MarkSorted(0), MarkSorted(1),
            Compare(0, 1), Merge(0, 2), Merge(1, 4),
            MarkSorted(0), MarkSorted(1),
            MarkSorted(2), MarkSorted(3),
            Compare(2, 3), Merge(2, 1), Merge(3, 4),
            MarkSorted(2), MarkSorted(3),
            Compare(0, 2), Merge(0, 1),
            Compare(0, 3), Merge(1, 2),
            Compare(1, 3), Merge(2, 4),
            MarkSorted(0), MarkSorted(1), MarkSorted(2), MarkSorted(3),
            Completed(),
        ]

    def test_unchanged_position_not_written(self, recorder):
        """Index 3 already holds 4 when the final merge reaches it."""
        merge_sort([4, 2, 4, 1], recorder)
        last_merge = recorder.steps[14:20]
        assert not any(isinstance(s, Merge) and s.i == 3 for s in last_merge)

    def test_merge_events_always_change_value(self, recorder):
        data = [4, 2, 4, 1]
        merge_sort(data, recorder)
        state = list(data)
        for s in recorder.steps:
            if isinstance(s, Merge):
                assert state[s.i] != s.value
                state[s.i] = s.value

    def test_sorted_input_has_no_writes(self, recorder):
        merge_sort([1, 2, 3, 4, 5], recorder)
        assert count(recorder.steps, Merge) == 0
        assert count(recorder.steps, Swap) == 0

    def test_never_swaps(self, recorder):
        merge_sort([9, 8, 7, 6, 5, 4], recorder)
        assert count(recorder.steps, Swap) == 0


class TestAllEngines:

    @pytest.mark.parametrize("key", list(engines.ENGINES))
    @pytest.mark.parametrize("data", [[], [1]])
    def test_degenerate_inputs(self, recorder, key, data):
        assert run(key, data, recorder) == data
        assert recorder.steps == [Completed()]

    @pytest.mark.parametrize("key", list(engines.ENGINES))
    def test_generic_over_comparables(self, recorder, key):
        words = ["pear", "apple", "fig", "banana"]
        assert run(key, words, recorder) == sorted(words)
        floats = [2.5, -1.0, 3.25, 0.0]
        assert run(key, floats, recorder) == sorted(floats)

    @pytest.mark.parametrize("key", list(engines.ENGINES))
    def test_input_not_mutated(self, recorder, key):
        data = [3, 1, 2]
        run(key, data, recorder)
        assert data == [3, 1, 2]

    @pytest.mark.parametrize("key", list(engines.ENGINES))
    def test_generator_mutates_in_place(self, key):
        arr = [5, 4, 3, 2, 1]
        steps = list(engines.get_engine(key)(arr))
        assert arr == [1, 2, 3, 4, 5]
        assert steps[-1] == Completed()

    def test_unknown_engine(self):
        with pytest.raises(KeyError, match="Unknown engine"):
            engines.get_engine("bogo")
        with pytest.raises(KeyError):
            engines.engine_name("bogo")

    def test_registry_names(self):
        assert engines.engine_name("quick") == "Quick Sort"
        assert set(engines.ENGINES) == {"bubble", "quick", "merge"}

    @pytest.mark.parametrize("key", list(engines.ENGINES))
    def test_random_array(self, recorder, rng, key):
        data = rng.integers(10, 201, size=60).tolist()
        out = run(key, data, recorder)
        assert out == sorted(data)
        assert replay(data, recorder.steps) == out
