"""
astar.py — A* Search
=====================
Dijkstra's scan-for-minimum with f = g + h, h being the Manhattan
distance to `end`.  Manhattan is admissible on a 4-connected unit grid,
so the marked path is a shortest one.

Reports a visit and the new g on every improving relaxation.
"""

from typing import Dict, Optional, Set

from grid import Grid, Point
from algorithms.search_utils import INF, closest_unvisited, manhattan, reconstruct
from algorithms.steps import Liveness, SearchSteps, VisitRecord, is_running


def astar(
    grid: Grid,
    start: Point,
    end: Point,
    steps: SearchSteps,
    liveness: Liveness,
) -> None:
    g_score: Dict[Point, float]           = {start: 0}
    f_score: Dict[Point, float]           = {start: manhattan(start, end)}
    parent:  Dict[Point, Optional[Point]] = {start: None}
    closed:  Set[Point]                   = set()

    steps.visit(VisitRecord(start, None))

    current: Optional[Point] = start
    while current is not None:
        if not is_running(liveness):
            return

        closed.add(current)
        if current == end:
            steps.mark_path(reconstruct(parent, end))
            return

        for nbr in grid.neighbours(current):
            if nbr in closed:
                continue
            tentative_g = g_score[current] + 1
            if tentative_g < g_score.get(nbr, INF):
                parent[nbr]  = current
                g_score[nbr] = tentative_g
                f_score[nbr] = tentative_g + manhattan(nbr, end)
                steps.visit(VisitRecord(nbr, current))
                steps.update_distance(nbr, tentative_g)

        current = closest_unvisited(grid, closed, f_score)
