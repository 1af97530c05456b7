"""Real-time sorting visualizer: step-reporting engines plus a pygame front end."""

from .steps import Step, Compare, Swap, Merge, MarkSorted, Completed, STEP_TYPES, replay
from .engines import ENGINES, get_engine
from .runner import run, run_async, bubble_sort, quick_sort, merge_sort

__version__ = "0.1.0"
