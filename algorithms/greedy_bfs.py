"""
greedy_bfs.py — Greedy Best-First Search
==========================================
Expands the cell with the smallest h(n) — pure heuristic, zero regard
for the cost incurred so far.  Fast, but NOT optimal: compare it with
A* on a board with a wall between the endpoints.

A cell's parent is fixed the first time it is discovered.
"""

from typing import Dict, Optional, Set

from grid import Grid, Point
from algorithms.search_utils import closest_unvisited, manhattan, reconstruct
from algorithms.steps import Liveness, SearchSteps, VisitRecord, is_running


def greedy_bfs(
    grid: Grid,
    start: Point,
    end: Point,
    steps: SearchSteps,
    liveness: Liveness,
) -> None:
    h_score: Dict[Point, float]           = {start: manhattan(start, end)}
    parent:  Dict[Point, Optional[Point]] = {start: None}
    visited: Set[Point]                   = set()

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
            if nbr in visited or nbr in h_score:
                continue
            h_score[nbr] = manhattan(nbr, end)
            parent[nbr]  = current
            steps.visit(VisitRecord(nbr, current))

        current = closest_unvisited(grid, visited, h_score)
