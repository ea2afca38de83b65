"""
Distribution sorts: counting, radix and bucket.

None of these compare pairs of elements.  They map every value onto a
bounded integer key, distribute by key and write the result back, so
they report at a coarser grain:

    compare(i, i)  – element i has been read into its bucket / count
    update(k, v)   – position k now holds v

Keys come from _scaled_keys().  Values are normalised against the
array's own min / max and scaled by a fixed factor, which keeps the key
range bounded for any input.  Two distinct values can round to the same
key; _settle() puts such neighbours back in order, so the output is the
exact input multiset, ascending.
"""

from typing import Callable, List

from algorithms.steps import Liveness, SortSteps, is_running

COUNTING_SCALE = 100_000
RADIX_SCALE    = 100_000
RADIX_BASE     = 10


def _fraction(lo: float, hi: float) -> Callable[[float], float]:
    """Map [lo, hi] onto [0, 1], monotonically.  Requires hi > lo."""
    span = hi - lo
    if span == float("inf"):
        # hi - lo left the float range; halving both ends keeps it finite
        half = hi / 2 - lo / 2
        return lambda v: (v / 2 - lo / 2) / half
    return lambda v: (v - lo) / span


def _scaled_keys(array: List[float], scale: int) -> List[int]:
    lo, hi = min(array), max(array)
    if hi == lo:
        return [0] * len(array)
    if hi - lo <= scale and all(float(v).is_integer() for v in array):
        return [int(v - lo) for v in array]
    fraction = _fraction(lo, hi)
    return [int(round(fraction(v) * scale)) for v in array]


def _settle(values: List[float]) -> None:
    """Insertion pass over nearly-sorted values; only equal-key neighbours move."""
    for i in range(1, len(values)):
        v = values[i]
        j = i - 1
        while j >= 0 and values[j] > v:
            values[j + 1] = values[j]
            j -= 1
        values[j + 1] = v


def _write_back(array: List[float], values: List[float], steps: SortSteps, liveness: Liveness,
                changed_only: bool = False) -> None:
    for i, value in enumerate(values):
        if not is_running(liveness):
            return
        if changed_only and array[i] == value:
            continue
        array[i] = value
        steps.update(i, value)


# ---------------------------------------------------------------------------
# Counting sort
# ---------------------------------------------------------------------------
def counting_sort(array: List[float], steps: SortSteps, liveness: Liveness) -> None:
    if not array:
        return
    n = len(array)
    keys = _scaled_keys(array, COUNTING_SCALE)
    count = [0] * (max(keys) + 1)

    for i in range(n):
        if not is_running(liveness):
            return
        steps.compare(i, i)
        count[keys[i]] += 1

    for k in range(1, len(count)):
        count[k] += count[k - 1]

    # back to front keeps equal keys in input order
    output: List[float] = [0] * n
    for i in range(n - 1, -1, -1):
        if not is_running(liveness):
            return
        count[keys[i]] -= 1
        output[count[keys[i]]] = array[i]

    _settle(output)
    _write_back(array, output, steps, liveness)


# ---------------------------------------------------------------------------
# Radix sort (LSD, base 10)
# ---------------------------------------------------------------------------
def radix_sort(array: List[float], steps: SortSteps, liveness: Liveness) -> None:
    if not array:
        return
    n = len(array)
    keys = _scaled_keys(array, RADIX_SCALE)
    max_key = max(keys)
    place = 1

    while True:
        buckets: List[List[tuple]] = [[] for _ in range(RADIX_BASE)]
        for i in range(n):
            if not is_running(liveness):
                return
            steps.compare(i, i)
            buckets[(keys[i] // place) % RADIX_BASE].append((keys[i], array[i]))

        idx = 0
        for bucket in buckets:
            for key, value in bucket:
                if not is_running(liveness):
                    return
                keys[idx] = key
                array[idx] = value
                steps.update(idx, value)
                idx += 1

        place *= RADIX_BASE
        if max_key // place == 0:
            break

    settled = list(array)
    _settle(settled)
    _write_back(array, settled, steps, liveness, changed_only=True)


# ---------------------------------------------------------------------------
# Bucket sort
# ---------------------------------------------------------------------------
def bucket_sort(array: List[float], steps: SortSteps, liveness: Liveness) -> None:
    """n equal-width buckets over [min, max]; each bucket sorted on its own."""
    if not array:
        return
    n = len(array)
    lo, hi = min(array), max(array)
    fraction = _fraction(lo, hi) if hi > lo else None
    buckets: List[List[float]] = [[] for _ in range(n)]

    for i in range(n):
        if not is_running(liveness):
            return
        steps.compare(i, i)
        idx = 0 if fraction is None else min(int(fraction(array[i]) * n), n - 1)
        buckets[idx].append(array[i])

    for bucket in buckets:
        bucket.sort()

    _write_back(array, [v for bucket in buckets for v in bucket], steps, liveness)
