"""
recorder.py — Step Recorder & Run Metrics
===========================================
A consumer that draws nothing: it implements both step interfaces and
keeps every event it receives, in order, as a StepEvent.  The API serves
these events to a browser, and the tests assert against them.

Usage:
    rec = StepRecorder()
    ctl = SortingController([3, 1, 2], SortAlgorithm.BUBBLE, rec)
    ctl.start()
    rec.metrics()          # the analytics card
    rec.events_since(0)    # everything, oldest first

A search that ends without a mark_path event found no route;
RunMetrics.path_found is how a consumer tells the two apart.

The recorder is appended to from the run thread and read from request
threads, so every access goes through one lock.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from grid import Point
from algorithms.steps import SearchSteps, SortSteps, VisitRecord


# ---------------------------------------------------------------------------
# Event & metrics records
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class StepEvent:
    """
    Attributes:
        step_number : 0-based position of this event in the recording.
        kind        : compare | swap | update | mark_sorted | visit |
                      update_distance | mark_path | reset
        indices     : Array indices for compare / swap / update.
        value       : New value (update) or distance (update_distance).
        point       : Cell for visit / update_distance.
        came_from   : Predecessor of a visited cell, None for a root.
        path        : Full path of a mark_path event.
    """

    step_number: int
    kind:        str
    indices:     Tuple[int, ...]  = ()
    value:       Optional[float]  = None
    point:       Optional[Point]  = None
    came_from:   Optional[Point]  = None
    path:        Tuple[Point, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        data = {"step": self.step_number, "kind": self.kind}
        if self.indices:
            data["indices"] = list(self.indices)
        if self.value is not None:
            data["value"] = self.value
        if self.point is not None:
            data["point"] = self.point.to_dict()
            data["came_from"] = self.came_from.to_dict() if self.came_from else None
        if self.kind == "mark_path":
            data["path"] = [p.to_dict() for p in self.path]
        return data


@dataclass
class RunMetrics:
    compares:         int   = 0
    swaps:            int   = 0
    updates:          int   = 0
    visits:           int   = 0
    distance_updates: int   = 0
    path_length:      int   = 0          # number of moves on the marked path
    path_found:       bool  = False
    sorted_marked:    bool  = False
    total_steps:      int   = 0
    elapsed_ms:       float = 0.0        # first event → last event

    def to_dict(self) -> dict:
        return dict(self.__dict__)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class StepRecorder(SortSteps, SearchSteps):
    """
    Attributes:
        on_step : Optional callback(StepEvent), fired after each event is
                  stored, on the thread that reported it.
    """

    def __init__(self, on_step: Optional[Callable[[StepEvent], None]] = None):
        self._lock = threading.Lock()
        self._events: List[StepEvent] = []
        self._first_at: Optional[float] = None
        self._last_at:  Optional[float] = None
        self.on_step = on_step

    # -- SortSteps --
    def compare(self, i: int, j: int) -> None:
        self._record("compare", indices=(i, j))

    def swap(self, i: int, j: int) -> None:
        self._record("swap", indices=(i, j))

    def update(self, index: int, value: float) -> None:
        self._record("update", indices=(index,), value=value)

    def mark_sorted(self) -> None:
        self._record("mark_sorted")

    # -- SearchSteps --
    def visit(self, record: VisitRecord) -> None:
        self._record("visit", point=record.point, came_from=record.came_from)

    def update_distance(self, point: Point, distance: float) -> None:
        self._record("update_distance", point=point, value=distance)

    def mark_path(self, points: List[Point]) -> None:
        self._record("mark_path", path=tuple(points))

    def reset(self) -> None:
        self._record("reset")

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------
    @property
    def events(self) -> List[StepEvent]:
        with self._lock:
            return list(self._events)

    def events_since(self, index: int) -> List[StepEvent]:
        with self._lock:
            return self._events[max(index, 0):]

    def of_kind(self, kind: str) -> List[StepEvent]:
        with self._lock:
            return [e for e in self._events if e.kind == kind]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events = []
            self._first_at = self._last_at = None

    def metrics(self) -> RunMetrics:
        """Tally everything since the last reset event (or clear())."""
        with self._lock:
            events = list(self._events)
            first, last = self._first_at, self._last_at

        for i in range(len(events) - 1, -1, -1):
            if events[i].kind == "reset":
                events = events[i + 1:]
                break

        m = RunMetrics(total_steps=len(events))
        for e in events:
            if e.kind == "compare":
                m.compares += 1
            elif e.kind == "swap":
                m.swaps += 1
            elif e.kind == "update":
                m.updates += 1
            elif e.kind == "visit":
                m.visits += 1
            elif e.kind == "update_distance":
                m.distance_updates += 1
            elif e.kind == "mark_sorted":
                m.sorted_marked = True
            elif e.kind == "mark_path":
                m.path_found  = True
                m.path_length = max(len(e.path) - 1, 0)
        if first is not None and last is not None:
            m.elapsed_ms = (last - first) * 1000.0
        return m

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _record(self, kind: str, **fields) -> None:
        now = time.monotonic()
        with self._lock:
            event = StepEvent(step_number=len(self._events), kind=kind, **fields)
            self._events.append(event)
            if self._first_at is None or kind == "reset":
                self._first_at = now
            self._last_at = now
        if self.on_step is not None:
            self.on_step(event)
