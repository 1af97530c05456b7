"""
Driving an engine through a reporting callback.

    on_step(step, snapshot) -> bool

is called for every step with a copy of the working list. A truthy result
lets the engine continue; a falsy one cancels the run right there: the
engine generator is closed at that step and the partially sorted list is
returned. The result of the call for Completed is not consulted.

Pacing belongs to the callback: it may block (or, with run_async, await)
as long as it likes before returning.
"""

import logging

from . import engines
from .steps import Completed

log = logging.getLogger(__name__)


def _resolve(engine):
    return engines.get_engine(engine) if isinstance(engine, str) else engine


def run(engine, data, on_step) -> list:
    """
    Sort a copy of `data` with `engine` (a key of ENGINES or an engine
    function), reporting every step to `on_step`. Returns the working list.
    """
    arr = list(data)
    steps = _resolve(engine)(arr)
    try:
        for count, step in enumerate(steps, 1):
            proceed = on_step(step, list(arr))
            if isinstance(step, Completed):
                break
            if not proceed:
                log.debug("run cancelled after %d steps at %r", count, step)
                break
    finally:
        steps.close()
    return arr


async def run_async(engine, data, on_step) -> list:
    """Same as run() for a coroutine callback."""
    arr = list(data)
    steps = _resolve(engine)(arr)
    try:
        for count, step in enumerate(steps, 1):
            proceed = await on_step(step, list(arr))
            if isinstance(step, Completed):
                break
            if not proceed:
                log.debug("run cancelled after %d steps at %r", count, step)
                break
    finally:
        steps.close()
    return arr


def bubble_sort(array, on_step) -> list:
    return run(engines.bubble_sort, array, on_step)


def quick_sort(array, on_step) -> list:
    return run(engines.quick_sort, array, on_step)


def merge_sort(array, on_step) -> list:
    return run(engines.merge_sort, array, on_step)
