import random
import threading

import pytest

from algorithms.search_utils import manhattan
from algorithms.steps import RunState
from engine import Pacing, StepRecorder
from grid import Grid, Point


# no waiting at all; skipping still applies above level 3
INSTANT = Pacing(time_scale=0)


@pytest.fixture
def recorder():
    return StepRecorder()


@pytest.fixture
def instant():
    return INSTANT


class CountdownLiveness:
    """Liveness that reports a live run for `calls` queries, then a cancelled one."""

    def __init__(self, calls: int, recorder: StepRecorder):
        self.remaining = calls
        self.recorder = recorder
        self.events_at_cancel = None

    def __call__(self) -> RunState:
        if self.remaining > 0:
            self.remaining -= 1
            return RunState(is_active=True)
        if self.events_at_cancel is None:
            self.events_at_cancel = len(self.recorder)
        return RunState(is_cancelled=True)


@pytest.fixture
def countdown(recorder):
    return lambda calls: CountdownLiveness(calls, recorder)


class FirstStepLatch:
    """on_step hook: runs `action` once on the first event, then sets `fired`."""

    def __init__(self, action=None):
        self.action = action
        self.fired = threading.Event()

    def __call__(self, event):
        if self.fired.is_set():
            return
        if self.action is not None:
            self.action()
        self.fired.set()


@pytest.fixture
def latch():
    return FirstStepLatch


def random_values(n, seed=0):
    rng = random.Random(seed)
    return [rng.random() for _ in range(n)]


def is_valid_path(grid: Grid, path, start: Point, end: Point) -> bool:
    if not path or path[0] != start or path[-1] != end:
        return False
    for a, b in zip(path, path[1:]):
        if manhattan(a, b) != 1:
            return False
    return all(grid.in_bounds(p) and not grid.is_blocked(p) for p in path)


def shortest_distance(grid: Grid, start: Point, end: Point):
    """Plain BFS hop count, for checking the optimal searches."""
    frontier, seen, depth = [start], {start}, 0
    while frontier:
        if end in frontier:
            return depth
        nxt = []
        for p in frontier:
            for n in grid.neighbours(p):
                if n not in seen:
                    seen.add(n)
                    nxt.append(n)
        frontier, depth = nxt, depth + 1
    return None
