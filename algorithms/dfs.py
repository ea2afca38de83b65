"""
dfs.py — Depth-First Search
============================
Same shape as BFS with a LIFO stack.  Neighbours are marked seen when
pushed, so each cell is visited once.  Does NOT guarantee a shortest path.
"""

from typing import Dict, List, Optional

from grid import Grid, Point
from algorithms.search_utils import reconstruct
from algorithms.steps import Liveness, SearchSteps, VisitRecord, is_running


def dfs(
    grid: Grid,
    start: Point,
    end: Point,
    steps: SearchSteps,
    liveness: Liveness,
) -> None:
    stack: List[Point] = [start]
    parent: Dict[Point, Optional[Point]] = {start: None}

    steps.visit(VisitRecord(start, None))

    while stack:
        if not is_running(liveness):
            return

        current = stack.pop()

        if current == end:
            steps.mark_path(reconstruct(parent, end))
            return

        for nbr in grid.neighbours(current):
            if nbr in parent:
                continue
            parent[nbr] = current
            stack.append(nbr)
            steps.visit(VisitRecord(nbr, current))
