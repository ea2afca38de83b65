"""
bidirectional_astar.py — Bidirectional A*
==========================================
Two A* searches: forward from `start` guided by h = manhattan(n, end),
backward from `end` guided by h = manhattan(n, start).  Each round
settles one cell per side, alternating.

Stops the instant a cell discovered by one side has already been reached
by the other; the two predecessor chains are joined at that cell.  The
joined path is valid but, unlike plain A*, not guaranteed shortest.
"""

from typing import Dict, Optional, Set

from grid import Grid, Point
from algorithms.bidirectional_bfs import join_paths
from algorithms.search_utils import INF, closest_unvisited, manhattan
from algorithms.steps import Liveness, SearchSteps, VisitRecord, is_running


class _Side:
    """Bookkeeping for one direction of the search."""

    def __init__(self, origin: Point, goal: Point):
        self.goal = goal
        self.g_score: Dict[Point, float]           = {origin: 0}
        self.f_score: Dict[Point, float]           = {origin: manhattan(origin, goal)}
        self.parent:  Dict[Point, Optional[Point]] = {origin: None}
        self.closed:  Set[Point]                   = set()

    def next_cell(self, grid: Grid) -> Optional[Point]:
        return closest_unvisited(grid, self.closed, self.f_score)

    def expand(self, grid: Grid, current: Point, other: "_Side", steps: SearchSteps) -> Optional[Point]:
        self.closed.add(current)
        for nbr in grid.neighbours(current):
            if nbr in self.closed:
                continue
            tentative_g = self.g_score[current] + 1
            if tentative_g < self.g_score.get(nbr, INF):
                self.parent[nbr]  = current
                self.g_score[nbr] = tentative_g
                self.f_score[nbr] = tentative_g + manhattan(nbr, self.goal)
                steps.visit(VisitRecord(nbr, current))
                steps.update_distance(nbr, tentative_g)
                if nbr in other.parent:
                    return nbr
        return None


def bidirectional_astar(
    grid: Grid,
    start: Point,
    end: Point,
    steps: SearchSteps,
    liveness: Liveness,
) -> None:
    if start == end:
        steps.visit(VisitRecord(start, None))
        steps.mark_path([start])
        return

    fwd = _Side(start, end)
    bwd = _Side(end, start)

    steps.visit(VisitRecord(start, None))
    steps.visit(VisitRecord(end, None))

    while True:
        for side, other in ((fwd, bwd), (bwd, fwd)):
            if not is_running(liveness):
                return
            current = side.next_cell(grid)
            if current is None:
                return
            meet = side.expand(grid, current, other, steps)
            if meet is not None:
                steps.mark_path(join_paths(fwd.parent, bwd.parent, meet))
                return
