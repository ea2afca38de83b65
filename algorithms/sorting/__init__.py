"""
algorithms/sorting/
-------------------
In-place sorts written against the SortSteps interface.

Every function has the same shape:

    sort(array, steps, liveness) -> None

`array` is a list of numbers mutated in place.  The algorithm performs
each mutation itself and then reports it (swap / update), so a report
that is skipped or dropped never corrupts the data.
"""

from algorithms.sorting.exchange     import bubble_sort, cocktail_sort, comb_sort
from algorithms.sorting.insertion    import insertion_sort, selection_sort, shell_sort
from algorithms.sorting.recursive    import heap_sort, merge_sort, quick_sort
from algorithms.sorting.distribution import bucket_sort, counting_sort, radix_sort

__all__ = [
    "bubble_sort",
    "cocktail_sort",
    "comb_sort",
    "insertion_sort",
    "selection_sort",
    "shell_sort",
    "heap_sort",
    "merge_sort",
    "quick_sort",
    "bucket_sort",
    "counting_sort",
    "radix_sort",
]
