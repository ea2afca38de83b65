"""
dijkstra.py — Dijkstra's Algorithm
===================================
Uniform edge weight 1.  Each round settles the closest unvisited cell,
relaxes its open neighbours and reports every improvement as a visit
plus a distance update.

The next cell is found by scanning the whole board rather than popping a
heap (see search_utils.closest_unvisited).  That keeps the visit sequence
identical run to run at the price of O(V²) per search, which is fine at
the board sizes a person can watch.
"""

from typing import Dict, Optional, Set

from grid import Grid, Point
from algorithms.search_utils import INF, closest_unvisited, reconstruct
from algorithms.steps import Liveness, SearchSteps, VisitRecord, is_running


def dijkstra(
    grid: Grid,
    start: Point,
    end: Point,
    steps: SearchSteps,
    liveness: Liveness,
) -> None:
    dist:    Dict[Point, float]           = {p: INF for p in grid.points()}
    parent:  Dict[Point, Optional[Point]] = {start: None}
    visited: Set[Point]                   = set()

    dist[start] = 0
    steps.visit(VisitRecord(start, None))

    current: Optional[Point] = start
    while current is not None:
        if not is_running(liveness):
            return

        visited.add(current)
        if current == end:
            steps.mark_path(reconstruct(parent, end))
            return

        for nbr in grid.neighbours(current):
            if nbr in visited:
                continue
            new_dist = dist[current] + 1
            if new_dist < dist[nbr]:
                dist[nbr]   = new_dist
                parent[nbr] = current
                steps.visit(VisitRecord(nbr, current))
                steps.update_distance(nbr, new_dist)

        current = closest_unvisited(grid, visited, dist)
