"""
Helpers shared by the grid search algorithms.
"""

from typing import Dict, List, Optional, Set

from grid import Grid, Point

INF = float("inf")


def manhattan(a: Point, b: Point) -> int:
    """|Δx| + |Δy| — admissible on a 4-connected grid with unit edges."""
    return abs(a.x - b.x) + abs(a.y - b.y)


def reconstruct(parent: Dict[Point, Optional[Point]], target: Point) -> List[Point]:
    """Walk the predecessor chain back from target; returns start → target."""
    path = []
    cur: Optional[Point] = target
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path


def closest_unvisited(
    grid: Grid,
    visited: Set[Point],
    score: Dict[Point, float],
) -> Optional[Point]:
    """
    Full row-major scan for the unvisited point with the smallest score.

    O(V) per call, so O(V²) per run.  Kept as a scan rather than a heap so
    ties break the same way every time (first in row-major order) and the
    visit sequence stays stable.  Returns None when nothing reachable is left.
    """
    best: Optional[Point] = None
    best_score = INF
    for p in grid.points():
        if p in visited:
            continue
        s = score.get(p, INF)
        if s < best_score:
            best_score = s
            best = p
    return best
