"""
Step events reported by the sorting engines.

Every engine describes its progress with exactly these five variants:

    Compare(i, j)      positions i and j are being compared (no mutation)
    Swap(i, j)         positions i and j have just exchanged values
    Merge(i, value)    position i was overwritten with value (merge sort only)
    MarkSorted(i)      position i is final and will not be touched again
    Completed()        terminal event, emitted once per uncancelled run

Events carry indices (and the written value for Merge), never the sequence.
Consumers should keep a fallback branch for variants they do not know.
"""

from dataclasses import dataclass
from typing import Any


class Step:
    """Base of every step event."""
    __slots__ = ()

    @property
    def indices(self) -> tuple:
        """Positions of the sequence this step touches."""
        return ()


@dataclass(frozen=True, slots=True)
class Compare(Step):
    i: int
    j: int

    @property
    def indices(self):
        return (self.i, self.j)


@dataclass(frozen=True, slots=True)
class Swap(Step):
    i: int
    j: int

    @property
    def indices(self):
        return (self.i, self.j)


@dataclass(frozen=True, slots=True)
class Merge(Step):
    i: int
    value: Any

    @property
    def indices(self):
        return (self.i,)


@dataclass(frozen=True, slots=True)
class MarkSorted(Step):
    i: int

    @property
    def indices(self):
        return (self.i,)


@dataclass(frozen=True, slots=True)
class Completed(Step):
    pass


STEP_TYPES = (Compare, Swap, Merge, MarkSorted, Completed)


def replay(data, events) -> list:
    """
    Apply the mutating events of a run to a copy of `data`.

    Only Swap and Merge change the sequence; everything else is skipped.
    """
    arr = list(data)
    for ev in events:
        if isinstance(ev, Swap):
            arr[ev.i], arr[ev.j] = arr[ev.j], arr[ev.i]
        elif isinstance(ev, Merge):
            arr[ev.i] = ev.value
    return arr
