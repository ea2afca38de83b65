"""
Selection, insertion and shell sort.

Insertion and shell sort sink each element into place through adjacent
(or gap-spaced) swaps, reporting compare then swap for every move.
"""

from typing import List

from algorithms.steps import Liveness, SortSteps, is_running


def selection_sort(array: List[float], steps: SortSteps, liveness: Liveness) -> None:
    n = len(array)
    for i in range(n - 1):
        if not is_running(liveness):
            return
        min_idx = i
        for j in range(i + 1, n):
            if not is_running(liveness):
                return
            steps.compare(min_idx, j)
            if array[j] < array[min_idx]:
                min_idx = j
        if min_idx != i:
            array[i], array[min_idx] = array[min_idx], array[i]
            steps.swap(i, min_idx)


def _gapped_insertion(array: List[float], gap: int, steps: SortSteps, liveness: Liveness) -> None:
    for i in range(gap, len(array)):
        j = i
        while j >= gap:
            if not is_running(liveness):
                return
            steps.compare(j - gap, j)
            if array[j - gap] <= array[j]:
                break
            array[j - gap], array[j] = array[j], array[j - gap]
            steps.swap(j, j - gap)
            j -= gap


def insertion_sort(array: List[float], steps: SortSteps, liveness: Liveness) -> None:
    _gapped_insertion(array, 1, steps, liveness)


def shell_sort(array: List[float], steps: SortSteps, liveness: Liveness) -> None:
    """Shell's original gap sequence n/2, n/4, …, 1."""
    gap = len(array) // 2
    while gap > 0:
        if not is_running(liveness):
            return
        _gapped_insertion(array, gap, steps, liveness)
        gap //= 2
