"""
Exchange sorts: bubble, cocktail shaker and comb.

All three only ever swap two elements after comparing them, so each
step is a compare(i, j) optionally followed by swap(i, j).
"""

from typing import List

from algorithms.steps import Liveness, SortSteps, is_running


def _exchange(array: List[float], i: int, j: int, steps: SortSteps) -> None:
    array[i], array[j] = array[j], array[i]
    steps.swap(i, j)


def bubble_sort(array: List[float], steps: SortSteps, liveness: Liveness) -> None:
    n = len(array)
    for i in range(n - 1):
        if not is_running(liveness):
            return
        swapped = False
        for j in range(n - i - 1):
            if not is_running(liveness):
                return
            steps.compare(j, j + 1)
            if array[j] > array[j + 1]:
                _exchange(array, j, j + 1, steps)
                swapped = True
        if not swapped:
            break


def cocktail_sort(array: List[float], steps: SortSteps, liveness: Liveness) -> None:
    """Bubble sort that alternates direction, so small values near the end move fast."""
    start = 0
    end = len(array) - 1
    swapped = True

    while swapped and is_running(liveness):
        swapped = False
        for i in range(start, end):
            if not is_running(liveness):
                return
            steps.compare(i, i + 1)
            if array[i] > array[i + 1]:
                _exchange(array, i, i + 1, steps)
                swapped = True
        end -= 1

        if not swapped:
            break
        swapped = False

        for i in range(end - 1, start - 1, -1):
            if not is_running(liveness):
                return
            steps.compare(i, i + 1)
            if array[i] > array[i + 1]:
                _exchange(array, i, i + 1, steps)
                swapped = True
        start += 1


COMB_SHRINK = 1.3


def comb_sort(array: List[float], steps: SortSteps, liveness: Liveness) -> None:
    n = len(array)
    gap = n
    done = False

    while not done and is_running(liveness):
        gap = int(gap / COMB_SHRINK)
        if gap <= 1:
            gap = 1
            done = True

        for i in range(n - gap):
            if not is_running(liveness):
                return
            steps.compare(i, i + gap)
            if array[i] > array[i + gap]:
                _exchange(array, i, i + gap, steps)
                done = False
