"""
engine/
-------
Execution layer.

    from engine import SortingController, PathFindingController, StepRecorder
"""

from engine.pacing     import Pacing, SORTING_PACING, PATHFINDING_PACING, clamp_speed_level
from engine.controller import SortingController, PathFindingController
from engine.recorder   import StepRecorder, StepEvent, RunMetrics
from engine.runner     import BackgroundRun

__all__ = [
    "Pacing",
    "SORTING_PACING",
    "PATHFINDING_PACING",
    "clamp_speed_level",
    "SortingController",
    "PathFindingController",
    "StepRecorder",
    "StepEvent",
    "RunMetrics",
    "BackgroundRun",
]
