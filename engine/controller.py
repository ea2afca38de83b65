"""
controller.py — Stepped Execution Controller
==============================================
The controller is the ONLY object a consumer drives during a run.  It
owns the working copy of the data, the RunState and the algorithm, and
hands the algorithm a wrapped step interface that adds:

    • cancellation – a step from an abandoned run returns immediately
    • pause        – a step blocks while the run is paused
    • render skip  – above speed level 3 most steps are not drawn
    • pacing       – a rendered step is held for the computed delay

The algorithm body knows none of this.  It calls steps.compare(...) and
checks is_running(liveness) at its loop boundaries, nothing more.

State machine (RunState.phase):
    IDLE     →  start()              →  RUNNING
    RUNNING  ⇄  pause() / resume()   ⇄  PAUSED
    RUNNING  →  (algorithm returns)  →  FINISHED
    any      →  reset()              →  IDLE

Threading:
  start() runs the algorithm on the calling thread and returns when it
  does.  pause() / resume() / reset() / update_speed_level() are meant
  to be called from other threads while start() is blocked.  All state
  lives behind one threading.Condition; the consumer's step interface is
  always called outside it.

  Every start() opens a new run generation.  reset() closes the current
  one, so a liveness query or wrapped step interface belonging to an
  abandoned run keeps reporting "cancelled" even after a new run begins.
"""

import logging
import threading
from dataclasses import replace
from typing import Callable, List, Optional, Union

from grid import Grid, Point
from algorithms import PATHFINDING, SORTING, AlgorithmKey, resolve
from algorithms.steps import Liveness, RunState, SearchSteps, SortSteps, VisitRecord
from engine.pacing import PATHFINDING_PACING, SORTING_PACING, Pacing, clamp_speed_level

logger = logging.getLogger(__name__)

DEFAULT_SPEED_LEVEL   = 5
DEFAULT_POLL_INTERVAL = 0.05      # seconds; upper bound on one pause wait

_CANCELLED = RunState(is_cancelled=True)


# ---------------------------------------------------------------------------
# Shared run machinery
# ---------------------------------------------------------------------------
class _RunController:
    family: str = ""

    def __init__(
        self,
        algorithm: Union[AlgorithmKey, Callable, None],
        speed_level: int,
        pacing: Pacing,
        poll_interval: float,
    ):
        self._algorithm:     Optional[Callable] = resolve(algorithm, self.family)
        self._speed_level:   int                = clamp_speed_level(speed_level)
        self._pacing:        Pacing             = pacing
        self._poll_interval: float              = poll_interval
        self._cond                              = threading.Condition()
        self._state:         RunState           = RunState()
        self._generation:    int                = 0
        self._skip_counter:  int                = 0

    # ------------------------------------------------------------------
    # Public state
    # ------------------------------------------------------------------
    def get_state(self) -> RunState:
        with self._cond:
            return self._state

    @property
    def speed_level(self) -> int:
        return self._speed_level

    def pause(self) -> None:
        with self._cond:
            if not self._state.is_active or self._state.is_paused:
                return
            self._state = replace(self._state, is_paused=True)
            logger.debug("Run %d paused", self._generation)

    def resume(self) -> None:
        with self._cond:
            if not self._state.is_paused:
                return
            self._state = replace(self._state, is_paused=False)
            self._cond.notify_all()
            logger.debug("Run %d resumed", self._generation)

    def update_speed_level(self, level: int) -> None:
        """Takes effect from the next step."""
        level = clamp_speed_level(level)
        with self._cond:
            self._speed_level  = level
            self._skip_counter = 0

    def update_algorithm(self, algorithm: Union[AlgorithmKey, Callable]) -> bool:
        fn = resolve(algorithm, self.family)
        with self._cond:
            if self._state.is_active:
                logger.debug("Algorithm change rejected: run in progress")
                return False
            self._algorithm = fn
            return True

    def reset(self) -> None:
        """Abandon any run in flight and return to IDLE.  Safe at any time."""
        with self._cond:
            if self._state.is_active:
                logger.info("Run %d cancelled by reset", self._generation)
            self._generation  += 1
            self._state        = RunState()
            self._skip_counter = 0
            self._clear_working_copy()
            self._cond.notify_all()
        self._raw_reset()

    # ------------------------------------------------------------------
    # Run lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        """
        Run the bound algorithm to completion, cancellation or failure.

        No-op when a run is already active.  An exception raised by the
        algorithm is logged and re-raised once the controller is idle again.
        """
        with self._cond:
            if self._state.is_active:
                return
            if self._algorithm is None:
                logger.warning("start() ignored: no algorithm selected")
                return
            if not self._ready():
                logger.warning("start() ignored: no %s data loaded", self.family)
                return
            self._generation  += 1
            generation         = self._generation
            self._state        = RunState(is_active=True)
            self._skip_counter = 0
            call               = self._bind(generation)

        logger.info("Run %d started (%s, size=%d, speed=%d)",
                    generation, self.family, self._problem_size(), self._speed_level)
        try:
            call()
        except Exception:
            logger.exception("Run %d failed", generation)
            raise
        else:
            with self._cond:
                completed = self._is_current(generation)
                if completed:
                    self._state = replace(self._state, is_finished=True)
            if completed:
                self._on_complete(generation)
                logger.info("Run %d finished", generation)
        finally:
            with self._cond:
                if generation == self._generation:
                    self._state = RunState(is_finished=self._state.is_finished)
                self._cond.notify_all()

    # ------------------------------------------------------------------
    # Hooks for the two families
    # ------------------------------------------------------------------
    def _ready(self) -> bool:
        return True

    def _bind(self, generation: int) -> Callable[[], None]:
        raise NotImplementedError

    def _problem_size(self) -> int:
        raise NotImplementedError

    def _clear_working_copy(self) -> None:
        raise NotImplementedError

    def _raw_reset(self) -> None:
        raise NotImplementedError

    def _on_complete(self, generation: int) -> None:
        pass

    # ------------------------------------------------------------------
    # Step gate, used by the wrapped interfaces
    # ------------------------------------------------------------------
    def _is_current(self, generation: int) -> bool:
        return generation == self._generation and self._state.is_active

    def _liveness(self, generation: int) -> Liveness:
        def liveness() -> RunState:
            with self._cond:
                if self._is_current(generation):
                    return self._state
                return _CANCELLED
        return liveness

    def _checkpoint(self, generation: int) -> bool:
        """Block while paused.  False means the run is gone and the step must be dropped."""
        with self._cond:
            while self._is_current(generation) and self._state.is_paused:
                self._cond.wait(self._poll_interval)
            return self._is_current(generation)

    def _should_render(self) -> bool:
        with self._cond:
            budget = self._pacing.skip_budget(self._problem_size(), self._speed_level)
            if self._skip_counter < budget:
                self._skip_counter += 1
                return False
            self._skip_counter = 0
            return True

    def _hold(self, generation: int, ratio: float) -> None:
        """Wait out the step delay; reset() cuts the wait short."""
        with self._cond:
            seconds = self._pacing.delay_seconds(self._problem_size(), self._speed_level, ratio)
            if seconds > 0:
                self._cond.wait_for(lambda: not self._is_current(generation), timeout=seconds)

    def _deliver(self, generation: int, draw: Callable[[], None], ratio: float = 1.0,
                 skippable: bool = True) -> None:
        if not self._checkpoint(generation):
            return
        if skippable and not self._should_render():
            return
        draw()
        if ratio > 0:
            self._hold(generation, ratio)


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------
class _PacedSortSteps(SortSteps):
    """SortSteps bound to one run generation of a SortingController."""

    # compare / swap / update each hold half the computed delay
    RATIO = 0.5

    def __init__(self, controller: "SortingController", generation: int):
        self._ctl = controller
        self._gen = generation
        self._raw = controller._steps

    def compare(self, i: int, j: int) -> None:
        self._ctl._deliver(self._gen, lambda: self._raw.compare(i, j), self.RATIO)

    def swap(self, i: int, j: int) -> None:
        self._ctl._deliver(self._gen, lambda: self._raw.swap(i, j), self.RATIO)

    def update(self, index: int, value: float) -> None:
        self._ctl._deliver(self._gen, lambda: self._raw.update(index, value), self.RATIO)

    def mark_sorted(self) -> None:
        # issued by the controller once the algorithm returns
        pass

    def reset(self) -> None:
        if self._ctl._is_current(self._gen):
            self._raw.reset()


class SortingController(_RunController):
    """
    Drives one sorting run at a time over a private copy of the array.

    Args:
        array       : Initial values; copied.
        algorithm   : SortAlgorithm member, a callable with the sort
                      contract, or None (start() is then a no-op).
        steps       : The consumer's SortSteps.
        speed_level : 1 (slowest) … 10 (fastest).
    """

    family = SORTING

    def __init__(
        self,
        array: List[float],
        algorithm: Union[AlgorithmKey, Callable, None],
        steps: SortSteps,
        speed_level: int = DEFAULT_SPEED_LEVEL,
        pacing: Optional[Pacing] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        super().__init__(algorithm, speed_level, pacing or SORTING_PACING, poll_interval)
        self._array: List[float] = list(array)
        self._steps: SortSteps   = steps

    @property
    def array(self) -> List[float]:
        with self._cond:
            return list(self._array)

    def update_array(self, array: List[float]) -> bool:
        with self._cond:
            if self._state.is_active:
                logger.debug("Array update rejected: run in progress")
                return False
            self._array = list(array)
            self._state = RunState()
            return True

    def _bind(self, generation: int) -> Callable[[], None]:
        array    = self._array
        steps    = _PacedSortSteps(self, generation)
        liveness = self._liveness(generation)
        fn       = self._algorithm
        return lambda: fn(array, steps, liveness)

    def _problem_size(self) -> int:
        return len(self._array)

    def _clear_working_copy(self) -> None:
        self._array = []

    def _raw_reset(self) -> None:
        self._steps.reset()

    def _on_complete(self, generation: int) -> None:
        if self._checkpoint(generation):
            self._steps.mark_sorted()


# ---------------------------------------------------------------------------
# Path finding
# ---------------------------------------------------------------------------
class _PacedSearchSteps(SearchSteps):
    """SearchSteps bound to one run generation of a PathFindingController."""

    def __init__(self, controller: "PathFindingController", generation: int):
        self._ctl = controller
        self._gen = generation
        self._raw = controller._steps

    def visit(self, record: VisitRecord) -> None:
        self._ctl._deliver(self._gen, lambda: self._raw.visit(record))

    def update_distance(self, point: Point, distance: float) -> None:
        self._ctl._deliver(self._gen, lambda: self._raw.update_distance(point, distance),
                           ratio=0, skippable=False)

    def mark_path(self, points: List[Point]) -> None:
        path = list(points)
        self._ctl._deliver(self._gen, lambda: self._raw.mark_path(path),
                           ratio=0, skippable=False)

    def reset(self) -> None:
        if self._ctl._is_current(self._gen):
            self._raw.reset()


class PathFindingController(_RunController):
    """
    Drives one search at a time over a private copy of the grid.

    The grid, endpoints and walls can only be changed while idle, and an
    endpoint can never sit on a wall: toggle_wall() refuses the start and
    end cells and update_start_point() / update_end_point() refuse blocked
    or out-of-bounds cells.
    """

    family = PATHFINDING

    def __init__(
        self,
        grid: Grid,
        start: Point,
        end: Point,
        algorithm: Union[AlgorithmKey, Callable, None],
        steps: SearchSteps,
        speed_level: int = DEFAULT_SPEED_LEVEL,
        pacing: Optional[Pacing] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        super().__init__(algorithm, speed_level, pacing or PATHFINDING_PACING, poll_interval)
        self._grid:  Optional[Grid] = grid.copy()
        self._start: Point          = Point(*start)
        self._end:   Point          = Point(*end)
        self._steps: SearchSteps    = steps
        for p in (self._start, self._end):
            if not self._grid.in_bounds(p) or self._grid.is_blocked(p):
                raise ValueError(f"Endpoint {tuple(p)} is blocked or outside the grid")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def grid(self) -> Optional[Grid]:
        with self._cond:
            return self._grid.copy() if self._grid is not None else None

    @property
    def start_point(self) -> Point:
        return self._start

    @property
    def end_point(self) -> Point:
        return self._end

    # ------------------------------------------------------------------
    # Idle-only mutations
    # ------------------------------------------------------------------
    def update_grid(self, grid: Grid, start: Optional[Point] = None,
                    end: Optional[Point] = None) -> bool:
        """Replace the working grid, optionally moving the endpoints with it."""
        with self._cond:
            if self._state.is_active:
                logger.debug("Grid update rejected: run in progress")
                return False
            start = Point(*start) if start is not None else self._start
            end   = Point(*end) if end is not None else self._end
            if not self._endpoints_fit(grid, start, end):
                logger.debug("Grid update rejected: endpoints blocked or out of bounds")
                return False
            self._grid  = grid.copy()
            self._start = start
            self._end   = end
            self._state = RunState()
            return True

    def update_start_point(self, point: Point) -> bool:
        return self._move_endpoint(Point(*point), is_start=True)

    def update_end_point(self, point: Point) -> bool:
        return self._move_endpoint(Point(*point), is_start=False)

    def toggle_wall(self, point: Point) -> bool:
        point = Point(*point)
        with self._cond:
            if self._state.is_active or self._grid is None:
                logger.debug("Wall toggle rejected: run in progress or no grid")
                return False
            if point in (self._start, self._end) or not self._grid.in_bounds(point):
                return False
            self._grid.toggle(point)
            return True

    def _move_endpoint(self, point: Point, is_start: bool) -> bool:
        with self._cond:
            if self._state.is_active or self._grid is None:
                return False
            start = point if is_start else self._start
            end   = self._end if is_start else point
            if not self._endpoints_fit(self._grid, start, end):
                return False
            self._start, self._end = start, end
            return True

    @staticmethod
    def _endpoints_fit(grid: Grid, start: Point, end: Point) -> bool:
        return all(grid.in_bounds(p) and not grid.is_blocked(p) for p in (start, end))

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------
    def _ready(self) -> bool:
        return self._grid is not None

    def _bind(self, generation: int) -> Callable[[], None]:
        grid, start, end = self._grid, self._start, self._end
        steps    = _PacedSearchSteps(self, generation)
        liveness = self._liveness(generation)
        fn       = self._algorithm
        return lambda: fn(grid, start, end, steps, liveness)

    def _problem_size(self) -> int:
        return self._grid.size if self._grid is not None else 0

    def _clear_working_copy(self) -> None:
        self._grid = None

    def _raw_reset(self) -> None:
        self._steps.reset()
