"""
Sorting engines.

Each engine is a generator function that takes the working list, sorts it
in place and yields one step event for every comparison, write and
sorted-mark. Stopping the iteration (or closing the generator) cancels the
run at that step; the list is left as it is.
"""

from .steps import Compare, Swap, Merge, MarkSorted, Completed

# ============================================================
# ===================== SORTING ALGORITHMS ===================
# ============================================================

def bubble_sort(arr):
    n = len(arr)
    if n <= 1:
        yield Completed(); return
    for i in range(n):
        swapped = False
        for j in range(n - i - 1):
            yield Compare(j, j+1)
            if arr[j] > arr[j+1]:
                arr[j], arr[j+1] = arr[j+1], arr[j]; swapped = True
                yield Swap(j, j+1)
        yield MarkSorted(n - i - 1)
        if not swapped:
            break
    yield Completed()


def quick_sort(arr):
    def _partition(lo, hi):
        pivot = arr[hi]
        yield Compare(hi, hi)
        i = lo - 1
        for j in range(lo, hi):
            yield Compare(j, hi)
            if arr[j] < pivot:
                i += 1; arr[i], arr[j] = arr[j], arr[i]
                yield Swap(i, j)
        i += 1; arr[i], arr[hi] = arr[hi], arr[i]
        yield Swap(i, hi)
        return i

    def _q(lo, hi):
        if lo >= hi:
            # emitted for lo > hi as well; consumers ignore out-of-range marks
            yield MarkSorted(lo); return
        p = yield from _partition(lo, hi)
        yield MarkSorted(p)
        if p > lo: yield from _q(lo, p - 1)
        if p < hi: yield from _q(p + 1, hi)

    if len(arr) <= 1:
        yield Completed(); return
    yield from _q(0, len(arr) - 1)
    yield Completed()


def merge_sort(arr):
    def _put(k, v):
        # only real overwrites are reported
        if arr[k] != v:
            arr[k] = v
            yield Merge(k, v)

    def _m(lo, mid, hi):
        L = arr[lo:mid+1]; R = arr[mid+1:hi+1]
        i = j = 0; k = lo
        while i < len(L) and j < len(R):
            yield Compare(lo+i, mid+1+j)
            if L[i] <= R[j]: yield from _put(k, L[i]); i += 1
            else:            yield from _put(k, R[j]); j += 1
            k += 1
        while i < len(L): yield from _put(k, L[i]); i += 1; k += 1
        while j < len(R): yield from _put(k, R[j]); j += 1; k += 1
        for x in range(lo, hi+1):
            yield MarkSorted(x)

    def _ms(lo, hi):
        if lo >= hi:
            if lo == hi: yield MarkSorted(lo)
            return
        mid = lo + (hi - lo) // 2
        yield from _ms(lo, mid); yield from _ms(mid+1, hi)
        yield from _m(lo, mid, hi)

    if len(arr) <= 1:
        yield Completed(); return
    yield from _ms(0, len(arr) - 1)
    yield Completed()


ENGINES = {
    "bubble": ("Bubble Sort", bubble_sort),
    "quick":  ("Quick Sort",  quick_sort),
    "merge":  ("Merge Sort",  merge_sort),
}

DEFAULT_ENGINE = "bubble"


def get_engine(key):
    if key in ENGINES: return ENGINES[key][1]
    raise KeyError(f"Unknown engine: {key}")


def engine_name(key) -> str:
    if key in ENGINES: return ENGINES[key][0]
    raise KeyError(f"Unknown engine: {key}")
