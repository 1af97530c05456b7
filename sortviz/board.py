"""
Per-bar view state driven by step events.

The board keeps its own copy of the values and replays Swap / Merge events
onto it, so what is drawn is always exactly what the engine reported.
"""

import logging
import random
import threading
from enum import Enum

from .config import BAR_MIN, BAR_MAX
from .steps import Compare, Swap, Merge, MarkSorted, Completed

log = logging.getLogger(__name__)


class BarState(Enum):
    UNSORTED  = "unsorted"
    COMPARING = "comparing"
    SORTED    = "sorted"


class BarBoard:
    def __init__(self, values=()):
        self._lock      = threading.Lock()
        self._values    = list(values)
        self._states    = [BarState.UNSORTED] * len(self._values)
        self._comparing = ()

    def __len__(self):
        return len(self._values)

    @property
    def values(self) -> list:
        with self._lock:
            return list(self._values)

    def snapshot(self):
        """(values, states) copies, consistent with each other."""
        with self._lock:
            return list(self._values), list(self._states)

    def load(self, values):
        with self._lock:
            self._values    = list(values)
            self._states    = [BarState.UNSORTED] * len(self._values)
            self._comparing = ()

    def randomize(self, size, rng=None):
        rng = rng or random
        self.load(rng.randint(BAR_MIN, BAR_MAX) for _ in range(size))

    def reset_states(self):
        with self._lock:
            self._states    = [BarState.UNSORTED] * len(self._values)
            self._comparing = ()

    def _release_comparing(self):
        for i in self._comparing:
            if self._states[i] is BarState.COMPARING:
                self._states[i] = BarState.UNSORTED
        self._comparing = ()

    def apply(self, step):
        with self._lock:
            if isinstance(step, Compare):
                self._release_comparing()
                for i in step.indices:
                    if self._states[i] is not BarState.SORTED:
                        self._states[i] = BarState.COMPARING
                self._comparing = step.indices
            elif isinstance(step, Swap):
                v = self._values
                v[step.i], v[step.j] = v[step.j], v[step.i]
            elif isinstance(step, Merge):
                self._values[step.i] = step.value
            elif isinstance(step, MarkSorted):
                # quick sort may mark one past the end of a range
                if 0 <= step.i < len(self._states):
                    self._states[step.i] = BarState.SORTED
            elif isinstance(step, Completed):
                self._comparing = ()
                self._states = [BarState.SORTED] * len(self._values)
            else:
                log.debug("ignoring unknown step %r", step)
