"""
main.py — Algorithm Visualizer Flask API
==========================================
The web server a browser front end polls while it draws.  Rendering
happens in the browser; this process owns the controllers and records
every step they report.

Routes:
  GET  /api/algorithms                    – algorithm cards (?family=…)
  POST /api/sorting/array                 – load values, or generate {size, seed}
  POST /api/pathfinding/grid              – load a grid ({rows, cols, walls, start, end} or {text})
  POST /api/pathfinding/wall              – toggle one wall {x, y}
  POST /api/pathfinding/endpoints         – move start / end
  POST /api/<family>/start                – start a run {algorithm}
  POST /api/<family>/pause                – pause the run
  POST /api/<family>/resume               – resume it
  POST /api/<family>/reset                – abandon it, reload the loaded data
  POST /api/<family>/speed                – set the speed level {level}
  GET  /api/<family>/state                – run state, data, metrics
  GET  /api/<family>/events?since=N       – recorded steps from N on

<family> is "sorting" or "pathfinding".

State management:
  One Visualizer per app (app.extensions["visualizer"]), holding one
  Workspace per family.  A workspace keeps the loaded data (the display
  copy), a controller with its own working copy, the recorder the
  controller reports to, and the background thread of the current run.
"""

import logging
import random
from typing import List, Optional

from flask import Blueprint, Flask, current_app, jsonify, request

from algorithms import PATHFINDING, SORTING, get_algorithm, list_algorithms
from config import Settings
from engine import BackgroundRun, PathFindingController, SortingController, StepRecorder
from grid import Grid, Point
from logging_config import setup_logging

logger = logging.getLogger(__name__)

DEFAULT_ARRAY_SIZE = 50
DEFAULT_GRID_ROWS  = 15
DEFAULT_GRID_COLS  = 25


# ---------------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------------
class Workspace:
    """Controller, recorder and background run for one algorithm family."""

    def __init__(self, family: str, controller, recorder: StepRecorder):
        self.family     = family
        self.controller = controller
        self.recorder   = recorder
        self.run        = BackgroundRun(controller, name=family)
        self.algorithm: Optional[str] = None

    @property
    def busy(self) -> bool:
        return self.controller.get_state().is_active

    def start(self, algorithm_key: str) -> bool:
        info = get_algorithm(algorithm_key, self.family)
        if self.busy or self.run.is_alive:
            return False
        if not self.controller.update_algorithm(info.key):
            return False
        self.algorithm = info.key.value
        self.reload()
        self.recorder.clear()
        return self.run.launch()

    def reset(self) -> None:
        self.controller.reset()
        self.reload()

    def reload(self) -> None:
        raise NotImplementedError

    def data(self) -> dict:
        raise NotImplementedError

    def snapshot(self) -> dict:
        return {
            "family":      self.family,
            "algorithm":   self.algorithm,
            "state":       self.controller.get_state().to_dict(),
            "speed_level": self.controller.speed_level,
            "metrics":     self.recorder.metrics().to_dict(),
            "error":       repr(self.run.error) if self.run.error else None,
            "data":        self.data(),
        }


class SortingWorkspace(Workspace):

    def __init__(self, settings: Settings, values: List[float]):
        recorder = StepRecorder()
        controller = SortingController(
            values, None, recorder,
            speed_level=settings.speed_level,
            pacing=settings.sorting_pacing(),
            poll_interval=settings.poll_interval,
        )
        super().__init__(SORTING, controller, recorder)
        self.values = list(values)

    def load(self, values: List[float]) -> bool:
        if not self.controller.update_array(values):
            return False
        self.values = list(values)
        self.recorder.clear()
        return True

    def reload(self) -> None:
        self.controller.update_array(self.values)

    def data(self) -> dict:
        return {"values": self.values, "working": self.controller.array}


class PathFindingWorkspace(Workspace):

    def __init__(self, settings: Settings, grid: Grid, start: Point, end: Point):
        recorder = StepRecorder()
        controller = PathFindingController(
            grid, start, end, None, recorder,
            speed_level=settings.speed_level,
            pacing=settings.pathfinding_pacing(),
            poll_interval=settings.poll_interval,
        )
        super().__init__(PATHFINDING, controller, recorder)
        self.grid = grid.copy()

    def load(self, grid: Grid, start: Point, end: Point) -> bool:
        if not self.controller.update_grid(grid, start, end):
            return False
        self.grid = grid.copy()
        self.recorder.clear()
        return True

    def toggle_wall(self, point: Point) -> bool:
        if not self.controller.toggle_wall(point):
            return False
        self.grid.toggle(point)
        return True

    def reload(self) -> None:
        self.controller.update_grid(self.grid)

    def data(self) -> dict:
        return {
            "grid":  self.grid.to_dict(),
            "start": self.controller.start_point.to_dict(),
            "end":   self.controller.end_point.to_dict(),
        }


class Visualizer:
    """Everything one app instance serves."""

    def __init__(self, settings: Settings, seed: Optional[int] = None):
        self.settings = settings
        rng = random.Random(seed)
        self.workspaces = {
            SORTING: SortingWorkspace(
                settings, [rng.random() for _ in range(DEFAULT_ARRAY_SIZE)]),
            PATHFINDING: PathFindingWorkspace(
                settings,
                Grid.empty(DEFAULT_GRID_ROWS, DEFAULT_GRID_COLS),
                Point(2, DEFAULT_GRID_ROWS // 2),
                Point(DEFAULT_GRID_COLS - 3, DEFAULT_GRID_ROWS // 2),
            ),
        }


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------
api = Blueprint("api", __name__, url_prefix="/api")


def _visualizer() -> Visualizer:
    return current_app.extensions["visualizer"]


def _workspace(family: str) -> Optional[Workspace]:
    return _visualizer().workspaces.get(family)


def _payload() -> dict:
    return request.get_json(silent=True) or {}


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _parse_point(raw) -> Point:
    if isinstance(raw, dict):
        return Point.from_dict(raw)
    x, y = raw
    return Point(int(x), int(y))


@api.errorhandler(ValueError)
@api.errorhandler(KeyError)
@api.errorhandler(TypeError)
def _bad_request(exc):
    logger.debug("Rejected request: %s", exc)
    return _error(str(exc), 400)


# ---------------------------------------------------------------------------
# API: Catalogue
# ---------------------------------------------------------------------------
@api.route("/algorithms", methods=["GET"])
def api_algorithms():
    family = request.args.get("family")
    if family not in (None, SORTING, PATHFINDING):
        return _error(f"Unknown family: {family}", 400)
    return jsonify({"algorithms": [a.to_dict() for a in list_algorithms(family)]})


# ---------------------------------------------------------------------------
# API: Data
# ---------------------------------------------------------------------------
@api.route("/sorting/array", methods=["POST"])
def api_sorting_array():
    data = _payload()
    ws: SortingWorkspace = _workspace(SORTING)

    if "values" in data:
        values = [float(v) for v in data["values"]]
    else:
        size = int(data.get("size", DEFAULT_ARRAY_SIZE))
        if size < 0:
            raise ValueError("size must not be negative")
        rng = random.Random(data.get("seed"))
        values = [rng.random() for _ in range(size)]

    if not ws.load(values):
        return _error("A run is in progress", 409)
    return jsonify(ws.data())


@api.route("/pathfinding/grid", methods=["POST"])
def api_pathfinding_grid():
    data = _payload()
    ws: PathFindingWorkspace = _workspace(PATHFINDING)

    if "text" in data:
        grid, start, end = Grid.from_text(data["text"])
        start = start or _parse_point(data["start"])
        end   = end or _parse_point(data["end"])
    else:
        walls = [_parse_point(w) for w in data.get("walls", [])]
        grid  = Grid.from_walls(int(data["rows"]), int(data["cols"]), walls)
        start = _parse_point(data["start"])
        end   = _parse_point(data["end"])

    if ws.busy:
        return _error("A run is in progress", 409)
    if not ws.load(grid, start, end):
        return _error("Start and end must be open cells inside the grid", 400)
    return jsonify(ws.data())


@api.route("/pathfinding/wall", methods=["POST"])
def api_pathfinding_wall():
    ws: PathFindingWorkspace = _workspace(PATHFINDING)
    point = _parse_point(_payload())
    if not ws.toggle_wall(point):
        status = 409 if ws.busy else 400
        return _error(f"Cannot toggle wall at {tuple(point)}", status)
    return jsonify(ws.data())


@api.route("/pathfinding/endpoints", methods=["POST"])
def api_pathfinding_endpoints():
    data = _payload()
    ws: PathFindingWorkspace = _workspace(PATHFINDING)
    ctl = ws.controller

    if ws.busy:
        return _error("A run is in progress", 409)
    if "start" in data and not ctl.update_start_point(_parse_point(data["start"])):
        return _error("Start must be an open cell inside the grid", 400)
    if "end" in data and not ctl.update_end_point(_parse_point(data["end"])):
        return _error("End must be an open cell inside the grid", 400)
    return jsonify(ws.data())


# ---------------------------------------------------------------------------
# API: Run control
# ---------------------------------------------------------------------------
@api.route("/<family>/start", methods=["POST"])
def api_start(family: str):
    ws = _workspace(family)
    if ws is None:
        return _error(f"Unknown family: {family}", 404)
    key = _payload().get("algorithm")
    if not key:
        return _error("Missing 'algorithm'", 400)
    if not ws.start(key):
        return _error("A run is in progress", 409)
    logger.info("Started %s run with %s", family, key)
    return jsonify(ws.snapshot()), 202


@api.route("/<family>/pause", methods=["POST"])
def api_pause(family: str):
    ws = _workspace(family)
    if ws is None:
        return _error(f"Unknown family: {family}", 404)
    ws.controller.pause()
    return jsonify(ws.controller.get_state().to_dict())


@api.route("/<family>/resume", methods=["POST"])
def api_resume(family: str):
    ws = _workspace(family)
    if ws is None:
        return _error(f"Unknown family: {family}", 404)
    ws.controller.resume()
    return jsonify(ws.controller.get_state().to_dict())


@api.route("/<family>/reset", methods=["POST"])
def api_reset(family: str):
    ws = _workspace(family)
    if ws is None:
        return _error(f"Unknown family: {family}", 404)
    ws.reset()
    return jsonify(ws.snapshot())


@api.route("/<family>/speed", methods=["POST"])
def api_speed(family: str):
    ws = _workspace(family)
    if ws is None:
        return _error(f"Unknown family: {family}", 404)
    level = _payload().get("level")
    ws.controller.update_speed_level(level)
    return jsonify({"speed_level": ws.controller.speed_level})


# ---------------------------------------------------------------------------
# API: Polling
# ---------------------------------------------------------------------------
@api.route("/<family>/state", methods=["GET"])
def api_state(family: str):
    ws = _workspace(family)
    if ws is None:
        return _error(f"Unknown family: {family}", 404)
    return jsonify(ws.snapshot())


@api.route("/<family>/events", methods=["GET"])
def api_events(family: str):
    ws = _workspace(family)
    if ws is None:
        return _error(f"Unknown family: {family}", 404)
    since = request.args.get("since", 0, type=int)
    events = ws.recorder.events_since(since)
    return jsonify({
        "since":  since,
        "next":   since + len(events),
        "events": [e.to_dict() for e in events],
        "state":  ws.controller.get_state().to_dict(),
    })


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(settings: Optional[Settings] = None, seed: Optional[int] = None) -> Flask:
    settings = settings or Settings()
    settings.validate()

    app = Flask(__name__)
    app.extensions["visualizer"] = Visualizer(settings, seed=seed)
    app.register_blueprint(api)
    return app


if __name__ == "__main__":
    settings = Settings.from_env()
    setup_logging(getattr(logging, settings.log_level, logging.INFO), settings.log_file or None)
    app = create_app(settings)
    app.run(host=settings.host, port=settings.port, threaded=True)
