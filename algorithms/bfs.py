"""
bfs.py — Breadth-First Search
==============================
FIFO frontier.  Reports a visit the moment a cell is discovered, so the
visit order is exactly the layer-by-layer discovery order.

The first dequeue equal to `end` stops the search and marks the
shortest (hop-count) path.  An exhausted queue is a silent "no path".
"""

from collections import deque
from typing import Dict, Optional

from grid import Grid, Point
from algorithms.search_utils import reconstruct
from algorithms.steps import Liveness, SearchSteps, VisitRecord, is_running


def bfs(
    grid: Grid,
    start: Point,
    end: Point,
    steps: SearchSteps,
    liveness: Liveness,
) -> None:
    queue   = deque([start])
    parent: Dict[Point, Optional[Point]] = {start: None}

    steps.visit(VisitRecord(start, None))

    while queue:
        if not is_running(liveness):
            return

        current = queue.popleft()

        if current == end:
            steps.mark_path(reconstruct(parent, end))
            return

        for nbr in grid.neighbours(current):
            if nbr in parent:
                continue
            parent[nbr] = current
            queue.append(nbr)
            steps.visit(VisitRecord(nbr, current))
