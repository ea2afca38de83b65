"""
bidirectional_bfs.py — Bidirectional BFS
==========================================
Two BFS frontiers, one grown from `start` and one from `end`, expanded
one cell at a time in alternating rounds.

The search stops the instant one side discovers a cell the other side
has already reached.  The path is the start-side predecessor chain up to
that meeting cell, followed by the end-side chain from it back to `end`.

If either frontier empties first, its component has been exhausted
without meeting the other side: no path.
"""

from collections import deque
from typing import Deque, Dict, List, Optional

from grid import Grid, Point
from algorithms.search_utils import reconstruct
from algorithms.steps import Liveness, SearchSteps, VisitRecord, is_running

Parents = Dict[Point, Optional[Point]]


def bidirectional_bfs(
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

    q_fwd:   Deque[Point] = deque([start])
    q_bwd:   Deque[Point] = deque([end])
    par_fwd: Parents      = {start: None}
    par_bwd: Parents      = {end: None}

    steps.visit(VisitRecord(start, None))
    steps.visit(VisitRecord(end, None))

    while q_fwd and q_bwd:
        if not is_running(liveness):
            return

        meet = _expand(grid, q_fwd, par_fwd, par_bwd, steps)
        if meet is None:
            if not is_running(liveness):
                return
            meet = _expand(grid, q_bwd, par_bwd, par_fwd, steps)

        if meet is not None:
            steps.mark_path(join_paths(par_fwd, par_bwd, meet))
            return


def _expand(
    grid: Grid,
    queue: Deque[Point],
    own: Parents,
    other: Parents,
    steps: SearchSteps,
) -> Optional[Point]:
    """Dequeue one cell and discover its neighbours; returns the meeting cell if any."""
    if not queue:
        return None
    current = queue.popleft()
    for nbr in grid.neighbours(current):
        if nbr in own:
            continue
        own[nbr] = current
        steps.visit(VisitRecord(nbr, current))
        if nbr in other:
            return nbr
        queue.append(nbr)
    return None


def join_paths(forward: Parents, backward: Parents, meet: Point) -> List[Point]:
    """start → meet from the forward chain, then meet → end from the backward chain."""
    head = reconstruct(forward, meet)
    tail = reconstruct(backward, meet)
    tail.reverse()
    return head + tail[1:]
