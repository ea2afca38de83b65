"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, SortAlgorithm, get_algorithm

The set is closed: each algorithm is a member of SortAlgorithm or
SearchAlgorithm, and REGISTRY maps that member to an AlgoInfo card.
Controllers take the enum member, never a free-form name, so a typo
fails where the name is parsed (get_algorithm) rather than mid-run.

Contracts:
    sort   fn(array, steps, liveness)             -> None
    search fn(grid, start, end, steps, liveness)  -> None
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from algorithms.bfs                 import bfs
from algorithms.dfs                 import dfs
from algorithms.dijkstra            import dijkstra
from algorithms.astar               import astar
from algorithms.greedy_bfs          import greedy_bfs
from algorithms.bidirectional_bfs   import bidirectional_bfs
from algorithms.bidirectional_astar import bidirectional_astar
from algorithms.sorting import (
    bubble_sort, bucket_sort, cocktail_sort, comb_sort, counting_sort, heap_sort,
    insertion_sort, merge_sort, quick_sort, radix_sort, selection_sort, shell_sort,
)


SORTING     = "sorting"
PATHFINDING = "pathfinding"


class SortAlgorithm(Enum):
    BUBBLE    = "bubble"
    SELECTION = "selection"
    INSERTION = "insertion"
    SHELL     = "shell"
    MERGE     = "merge"
    QUICK     = "quick"
    HEAP      = "heap"
    COCKTAIL  = "cocktail"
    COUNTING  = "counting"
    RADIX     = "radix"
    COMB      = "comb"
    BUCKET    = "bucket"


class SearchAlgorithm(Enum):
    BFS                 = "bfs"
    DFS                 = "dfs"
    GREEDY_BEST_FIRST   = "greedy_bfs"
    DIJKSTRA            = "dijkstra"
    ASTAR               = "astar"
    BIDIRECTIONAL_BFS   = "bidirectional_bfs"
    BIDIRECTIONAL_ASTAR = "bidirectional_astar"


AlgorithmKey = Union[SortAlgorithm, SearchAlgorithm]


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              AlgorithmKey           # enum member
    label:            str                    # human label, e.g. "Breadth-First Search"
    family:           str                    # SORTING or PATHFINDING
    fn:               Callable               # the algorithm body
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""         # one-liner for the UI card

    def to_dict(self) -> dict:
        return {
            "key":              self.key.value,
            "label":            self.label,
            "family":           self.family,
            "tags":             list(self.tags),
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


def _sort(key, label, fn, tags, time, space, description) -> AlgoInfo:
    return AlgoInfo(key, label, SORTING, fn, tags, time, space, description)


def _search(key, label, fn, tags, time, space, description) -> AlgoInfo:
    return AlgoInfo(key, label, PATHFINDING, fn, tags, time, space, description)


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[AlgorithmKey, AlgoInfo] = {info.key: info for info in [

    # -- path finding --
    _search(SearchAlgorithm.BFS, "Breadth-First Search", bfs,
            ["unweighted", "shortest-path"], "O(V + E)", "O(V)",
            "Explores layer by layer. Finds a shortest path."),
    _search(SearchAlgorithm.DFS, "Depth-First Search", dfs,
            ["unweighted", "traversal"], "O(V + E)", "O(V)",
            "Dives deep before backtracking. Does NOT guarantee a shortest path."),
    _search(SearchAlgorithm.GREEDY_BEST_FIRST, "Greedy Best-First", greedy_bfs,
            ["heuristic", "suboptimal"], "O(V²)", "O(V)",
            "Always expands the cell closest to the goal by Manhattan distance. Fast, not optimal."),
    _search(SearchAlgorithm.DIJKSTRA, "Dijkstra's Algorithm", dijkstra,
            ["shortest-path"], "O(V²)", "O(V)",
            "Settles the closest unvisited cell each round. Optimal."),
    _search(SearchAlgorithm.ASTAR, "A* Search", astar,
            ["shortest-path", "heuristic"], "O(V²)", "O(V)",
            "Dijkstra guided by a Manhattan heuristic. Optimal on this grid."),
    _search(SearchAlgorithm.BIDIRECTIONAL_BFS, "Bidirectional BFS", bidirectional_bfs,
            ["unweighted", "bidirectional"], "O(b^(d/2))", "O(b^(d/2))",
            "Two frontiers from start and end that meet in the middle."),
    _search(SearchAlgorithm.BIDIRECTIONAL_ASTAR, "Bidirectional A*", bidirectional_astar,
            ["heuristic", "bidirectional"], "O(V²)", "O(V)",
            "A* from both ends at once; stops at the first meeting cell."),

    # -- sorting --
    _sort(SortAlgorithm.BUBBLE, "Bubble Sort", bubble_sort,
          ["comparison", "stable", "in-place"], "O(n²)", "O(1)",
          "Repeatedly swaps adjacent out-of-order pairs."),
    _sort(SortAlgorithm.SELECTION, "Selection Sort", selection_sort,
          ["comparison", "in-place"], "O(n²)", "O(1)",
          "Selects the minimum of the unsorted tail each pass."),
    _sort(SortAlgorithm.INSERTION, "Insertion Sort", insertion_sort,
          ["comparison", "stable", "in-place"], "O(n²)", "O(1)",
          "Sinks each element into the sorted prefix."),
    _sort(SortAlgorithm.SHELL, "Shell Sort", shell_sort,
          ["comparison", "in-place"], "O(n²)", "O(1)",
          "Insertion sort over shrinking gaps."),
    _sort(SortAlgorithm.MERGE, "Merge Sort", merge_sort,
          ["comparison", "stable", "divide-and-conquer"], "O(n log n)", "O(n)",
          "Sorts halves recursively and merges them."),
    _sort(SortAlgorithm.QUICK, "Quick Sort", quick_sort,
          ["comparison", "in-place", "divide-and-conquer"], "O(n log n)", "O(log n)",
          "Lomuto partition around the last element."),
    _sort(SortAlgorithm.HEAP, "Heap Sort", heap_sort,
          ["comparison", "in-place"], "O(n log n)", "O(1)",
          "Builds a max-heap and repeatedly extracts the root."),
    _sort(SortAlgorithm.COCKTAIL, "Cocktail Shaker Sort", cocktail_sort,
          ["comparison", "stable", "in-place"], "O(n²)", "O(1)",
          "Bubble sort in both directions."),
    _sort(SortAlgorithm.COUNTING, "Counting Sort", counting_sort,
          ["distribution", "stable"], "O(n + k)", "O(n + k)",
          "Counts scaled keys and places each value by prefix sums."),
    _sort(SortAlgorithm.RADIX, "Radix Sort", radix_sort,
          ["distribution", "stable"], "O(d · n)", "O(n)",
          "Distributes by one decimal digit of the scaled key per pass."),
    _sort(SortAlgorithm.COMB, "Comb Sort", comb_sort,
          ["comparison", "in-place"], "O(n²)", "O(1)",
          "Bubble sort over a gap that shrinks by 1.3."),
    _sort(SortAlgorithm.BUCKET, "Bucket Sort", bucket_sort,
          ["distribution"], "O(n + k)", "O(n)",
          "Spreads values over n equal-width buckets and sorts each."),
]}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: Union[AlgorithmKey, str], family: Optional[str] = None) -> AlgoInfo:
    """
    Return the AlgoInfo for an enum member or its string value.

    Raises ValueError for an unknown name, or one that belongs to a
    different family than the one asked for.
    """
    if isinstance(key, str):
        enums = {SORTING: [SortAlgorithm], PATHFINDING: [SearchAlgorithm]}.get(
            family, [SortAlgorithm, SearchAlgorithm])
        for enum_cls in enums:
            try:
                key = enum_cls(key)
                break
            except ValueError:
                continue
        else:
            raise ValueError(f"Unknown algorithm: {key!r}")

    info = REGISTRY.get(key)
    if info is None or (family is not None and info.family != family):
        raise ValueError(f"Unknown algorithm: {key!r}")
    return info


def list_algorithms(family: Optional[str] = None) -> List[AlgoInfo]:
    """Return registered algorithms in insertion order, optionally one family only."""
    return [a for a in REGISTRY.values() if family is None or a.family == family]


def resolve(algorithm: Union[AlgorithmKey, Callable, None], family: str) -> Optional[Callable]:
    """Turn a controller's algorithm argument into the function to call."""
    if algorithm is None:
        return None
    if isinstance(algorithm, Enum):
        return get_algorithm(algorithm, family).fn
    if callable(algorithm):
        return algorithm
    raise TypeError(f"Expected an algorithm enum member or callable, got {algorithm!r}")


__all__ = [
    "AlgoInfo",
    "AlgorithmKey",
    "PATHFINDING",
    "REGISTRY",
    "SORTING",
    "SearchAlgorithm",
    "SortAlgorithm",
    "get_algorithm",
    "list_algorithms",
    "resolve",
]
