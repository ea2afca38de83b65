"""
Divide-and-conquer sorts: merge, quick and heap.

The bodies stay recursive.  Every recursive call site checks liveness
first, so a cancelled run unwinds within one frame instead of finishing
the subtree it was in.
"""

from typing import List

from algorithms.steps import Liveness, SortSteps, is_running


# ---------------------------------------------------------------------------
# Merge sort
# ---------------------------------------------------------------------------
def merge_sort(array: List[float], steps: SortSteps, liveness: Liveness) -> None:
    """
    Top-down merge sort.  Merging writes into the array rather than
    exchanging, so placements are reported with update(k, value).
    """

    def merge(left: int, mid: int, right: int) -> None:
        left_part  = array[left:mid + 1]
        right_part = array[mid + 1:right + 1]
        i = j = 0
        k = left

        while i < len(left_part) and j < len(right_part):
            if not is_running(liveness):
                return
            steps.compare(left + i, mid + 1 + j)
            if left_part[i] <= right_part[j]:
                array[k] = left_part[i]
                i += 1
            else:
                array[k] = right_part[j]
                j += 1
            steps.update(k, array[k])
            k += 1

        for value in left_part[i:] + right_part[j:]:
            if not is_running(liveness):
                return
            array[k] = value
            steps.update(k, value)
            k += 1

    def sort(left: int, right: int) -> None:
        if left >= right or not is_running(liveness):
            return
        mid = (left + right) // 2
        sort(left, mid)
        if not is_running(liveness):
            return
        sort(mid + 1, right)
        if not is_running(liveness):
            return
        merge(left, mid, right)

    sort(0, len(array) - 1)


# ---------------------------------------------------------------------------
# Quick sort
# ---------------------------------------------------------------------------
def quick_sort(array: List[float], steps: SortSteps, liveness: Liveness) -> None:
    """
    Lomuto partitioning, last element as pivot.

    Recurses into the smaller partition and loops on the larger one, so
    the stack stays O(log n) deep even on already-sorted input.
    """

    def partition(low: int, high: int) -> int:
        pivot = array[high]
        i = low - 1
        for j in range(low, high):
            if not is_running(liveness):
                return -1
            steps.compare(j, high)
            if array[j] < pivot:
                i += 1
                array[i], array[j] = array[j], array[i]
                steps.swap(i, j)
        array[i + 1], array[high] = array[high], array[i + 1]
        steps.swap(i + 1, high)
        return i + 1

    def sort(low: int, high: int) -> None:
        while low < high:
            if not is_running(liveness):
                return
            pi = partition(low, high)
            if pi < 0:
                return
            if pi - low < high - pi:
                sort(low, pi - 1)
                low = pi + 1
            else:
                sort(pi + 1, high)
                high = pi - 1

    sort(0, len(array) - 1)


# ---------------------------------------------------------------------------
# Heap sort
# ---------------------------------------------------------------------------
def heap_sort(array: List[float], steps: SortSteps, liveness: Liveness) -> None:
    """Build a max-heap in place, then repeatedly move the root behind the heap."""

    def heapify(size: int, root: int) -> None:
        largest = root
        left  = 2 * root + 1
        right = 2 * root + 2

        if left < size:
            steps.compare(largest, left)
            if array[left] > array[largest]:
                largest = left
        if right < size:
            steps.compare(largest, right)
            if array[right] > array[largest]:
                largest = right

        if largest != root:
            array[root], array[largest] = array[largest], array[root]
            steps.swap(root, largest)
            if is_running(liveness):
                heapify(size, largest)

    n = len(array)
    for i in range(n // 2 - 1, -1, -1):
        if not is_running(liveness):
            return
        heapify(n, i)

    for end in range(n - 1, 0, -1):
        if not is_running(liveness):
            return
        array[0], array[end] = array[end], array[0]
        steps.swap(0, end)
        heapify(end, 0)
