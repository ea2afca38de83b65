"""
steps.py — Step Interface & Run State
======================================
The only channel between an algorithm and the outside world.

Every algorithm receives three things besides its data:
    • a step interface  – SortSteps or SearchSteps, called at every
                          observable event (compare, swap, visit, …)
    • a liveness query  – zero-arg callable returning the current RunState
    • nothing else      – no UI, no timers, no locks

Design decisions:
  - SortSteps / SearchSteps are plain base classes whose methods do
    nothing.  A renderer overrides only what it draws; the controller
    overrides all of them to add pacing, pause and cancellation.
  - Algorithms perform their own mutations on the array and only REPORT
    them here, so a step that is skipped for speed still leaves the data
    correct.
  - RunState is a frozen snapshot.  The controller is the only writer;
    algorithms read it through the liveness query.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Callable, List, NamedTuple, Optional

from grid import Point


# ---------------------------------------------------------------------------
# Run state
# ---------------------------------------------------------------------------
class RunPhase(Enum):
    IDLE     = "idle"
    RUNNING  = "running"
    PAUSED   = "paused"
    FINISHED = "finished"


@dataclass(frozen=True)
class RunState:
    """
    Attributes:
        is_active    : A run is in flight.
        is_paused    : The in-flight run is held at its next step.
        is_cancelled : The run this snapshot was taken for has been abandoned.
        is_finished  : The last run returned normally.
    """

    is_active:    bool = False
    is_paused:    bool = False
    is_cancelled: bool = False
    is_finished:  bool = False

    @property
    def phase(self) -> RunPhase:
        if self.is_active:
            return RunPhase.PAUSED if self.is_paused else RunPhase.RUNNING
        if self.is_finished:
            return RunPhase.FINISHED
        return RunPhase.IDLE

    def to_dict(self) -> dict:
        data = asdict(self)
        data["phase"] = self.phase.value
        return data


Liveness = Callable[[], RunState]

_ALWAYS = RunState(is_active=True)


def always_running() -> RunState:
    """Liveness for calling an algorithm directly, outside any controller."""
    return _ALWAYS


def is_running(liveness: Liveness) -> bool:
    state = liveness()
    return state.is_active and not state.is_cancelled


# ---------------------------------------------------------------------------
# Step interfaces
# ---------------------------------------------------------------------------
class VisitRecord(NamedTuple):
    point:     Point
    came_from: Optional[Point]


class SortSteps:
    """Progress reports from a sorting algorithm.  Indices refer to the array."""

    def compare(self, i: int, j: int) -> None:
        pass

    def swap(self, i: int, j: int) -> None:
        pass

    def update(self, index: int, value: float) -> None:
        pass

    def mark_sorted(self) -> None:
        pass

    def reset(self) -> None:
        pass


class SearchSteps:
    """Progress reports from a path-finding algorithm."""

    def visit(self, record: VisitRecord) -> None:
        pass

    def update_distance(self, point: Point, distance: float) -> None:
        pass

    def mark_path(self, points: List[Point]) -> None:
        pass

    def reset(self) -> None:
        pass
