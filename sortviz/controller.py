"""
Start / stop / select / resize around one engine run at a time.

The sort runs on a worker thread. Its reporting callback applies each step
to the board, hands it to the listeners (tone playback, for instance),
then waits out the pacing delay. stop() makes the next report return a
cancel outcome and joins the worker before touching the board again.
"""

import logging
import threading

from . import runner
from .board import BarBoard
from .config import (DEFAULT_ARRAY_SIZE, DEFAULT_SPEED, MIN_SPEED, MAX_SPEED,
                     STEP_DELAY)
from .engines import ENGINES, DEFAULT_ENGINE, engine_name
from .steps import Completed

log = logging.getLogger(__name__)


class SortController:
    def __init__(self, board=None, algorithm=DEFAULT_ENGINE, step_delay=STEP_DELAY, rng=None):
        if algorithm not in ENGINES:
            raise KeyError(f"Unknown engine: {algorithm}")
        self.board      = board if board is not None else BarBoard()
        self.algorithm  = algorithm
        self.step_delay = step_delay
        self.speed      = DEFAULT_SPEED
        self.result     = None
        self._finished  = False
        self.error      = None
        self._rng       = rng
        self._listeners = []
        self._stop      = threading.Event()
        self._thread    = None

    # ---- listeners ----

    def add_listener(self, fn):
        """fn(step, values) is called for every step of every run."""
        self._listeners.append(fn)

    def remove_listener(self, fn):
        self._listeners.remove(fn)

    # ---- state ----

    @property
    def is_sorting(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def select(self, key):
        if key not in ENGINES:
            raise KeyError(f"Unknown engine: {key}")
        self.stop()
        self.algorithm = key
        self.result = self.error = None

    def randomize(self, size=DEFAULT_ARRAY_SIZE):
        self.stop()
        self.board.randomize(size, self._rng)
        self.result = self.error = None

    # ---- run ----

    def start(self, speed=None):
        self.stop()
        if speed is not None:
            self.speed = max(MIN_SPEED, min(MAX_SPEED, speed))
        self.board.reset_states()
        self.result = self.error = None
        self._finished = False
        self._stop.clear()
        values = self.board.values
        log.info("starting %s on %d values at %.2fx",
                 engine_name(self.algorithm), len(values), self.speed)
        self._thread = threading.Thread(
            target=self._run, args=(self.algorithm, values), daemon=True)
        self._thread.start()

    def stop(self):
        thread = self._thread
        if thread is None:
            return
        self._stop.set()
        if thread is not threading.current_thread():
            thread.join()
        self._thread = None
        if self.result is None:
            log.info("stopped %s", engine_name(self.algorithm))
            self.board.reset_states()

    def wait(self, timeout=None) -> bool:
        """Block until the current run ends; False on timeout."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _report(self, step, values) -> bool:
        if self._stop.is_set():
            return False
        self.board.apply(step)
        if isinstance(step, Completed):
            self._finished = True
        for fn in list(self._listeners):
            fn(step, values)
        delay = self.step_delay / self.speed
        if delay > 0 and self._stop.wait(delay):
            return False
        return not self._stop.is_set()

    def _run(self, key, values):
        try:
            out = runner.run(key, values, self._report)
        except Exception as e:
            log.exception("%s failed", engine_name(key))
            self.error = e
            return
        # a stop() racing the final step does not undo a finished run
        if self._finished:
            self.result = out
            log.info("%s finished", engine_name(key))
