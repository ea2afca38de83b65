import time

import pytest

from config import Settings
from main import create_app


def _wait_until(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def _make(settings):
    app = create_app(settings, seed=1)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def app():
    return _make(Settings(time_scale=0, speed_level=1))


@pytest.fixture
def slow_app():
    # steps take seconds, so a run stays active for the whole test
    app = _make(Settings(time_scale=100, speed_level=1, poll_interval=0.01))
    yield app
    for ws in app.extensions["visualizer"].workspaces.values():
        ws.reset()
        ws.run.join(1)


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


def _workspace(app, family):
    return app.extensions["visualizer"].workspaces[family]


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
def test_algorithms(client):
    r = client.get("/api/algorithms")
    assert r.status_code == 200
    assert len(r.get_json()["algorithms"]) == 19

    assert len(client.get("/api/algorithms?family=sorting").get_json()["algorithms"]) == 12
    assert len(client.get("/api/algorithms?family=pathfinding").get_json()["algorithms"]) == 7
    assert client.get("/api/algorithms?family=bogus").status_code == 400


def test_initial_state(client):
    r = client.get("/api/sorting/state")
    assert r.status_code == 200
    body = r.get_json()
    assert body["state"]["phase"] == "idle"
    assert len(body["data"]["values"]) == 50

    body = client.get("/api/pathfinding/state").get_json()
    assert body["data"]["grid"]["rows"] == 15
    assert body["data"]["grid"]["cols"] == 25


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------
def test_sorting_run(app, client):
    assert client.post("/api/sorting/array", json={"values": [3, 1, 2]}).status_code == 200

    r = client.post("/api/sorting/start", json={"algorithm": "bubble"})
    assert r.status_code == 202
    assert _workspace(app, "sorting").run.join(2)

    body = client.get("/api/sorting/state").get_json()
    assert body["state"]["phase"] == "finished"
    assert body["algorithm"] == "bubble"
    assert body["data"]["values"] == [3, 1, 2]
    assert body["data"]["working"] == [1, 2, 3]
    assert body["metrics"]["sorted_marked"] is True
    assert body["error"] is None

    events = client.get("/api/sorting/events?since=0").get_json()
    assert events["next"] == len(events["events"])
    assert events["events"][-1]["kind"] == "mark_sorted"

    tail = client.get(f"/api/sorting/events?since={events['next']}").get_json()
    assert tail["events"] == []


def test_generate_array(client):
    r = client.post("/api/sorting/array", json={"size": 10, "seed": 3})
    assert r.status_code == 200
    assert len(r.get_json()["values"]) == 10
    assert client.post("/api/sorting/array", json={"size": -1}).status_code == 400


def test_reset_reloads_array(app, client):
    client.post("/api/sorting/array", json={"values": [2, 1]})
    client.post("/api/sorting/start", json={"algorithm": "merge"})
    assert _workspace(app, "sorting").run.join(2)

    body = client.post("/api/sorting/reset").get_json()
    assert body["state"]["phase"] == "idle"
    assert body["data"]["working"] == [2, 1]


@pytest.mark.parametrize("payload", [{}, {"algorithm": "bfs"}, {"algorithm": "bogo"}])
def test_start_rejects_bad_algorithm(client, payload):
    assert client.post("/api/sorting/start", json=payload).status_code == 400


def test_unknown_family(client):
    assert client.post("/api/nope/start", json={"algorithm": "bfs"}).status_code == 404
    assert client.get("/api/nope/state").status_code == 404
    assert client.post("/api/nope/reset").status_code == 404


def test_speed(client):
    r = client.post("/api/sorting/speed", json={"level": 42})
    assert r.get_json() == {"speed_level": 10}
    assert client.post("/api/sorting/speed", json={"level": "x"}).status_code == 400
    assert client.post("/api/sorting/speed", json={}).status_code == 400


# ---------------------------------------------------------------------------
# Path finding
# ---------------------------------------------------------------------------
def test_pathfinding_run_from_text(app, client):
    r = client.post("/api/pathfinding/grid", json={"text": "S..\n.#.\n..E"})
    assert r.status_code == 200
    assert r.get_json()["start"] == {"x": 0, "y": 0}

    assert client.post("/api/pathfinding/start", json={"algorithm": "astar"}).status_code == 202
    assert _workspace(app, "pathfinding").run.join(2)

    body = client.get("/api/pathfinding/state").get_json()
    assert body["state"]["phase"] == "finished"
    assert body["metrics"]["path_found"] is True
    assert body["metrics"]["path_length"] == 4


def test_grid_from_walls(client):
    r = client.post("/api/pathfinding/grid", json={
        "rows": 3, "cols": 4,
        "walls": [{"x": 1, "y": 1}, [2, 1]],
        "start": {"x": 0, "y": 0}, "end": [3, 2],
    })
    assert r.status_code == 200
    body = r.get_json()
    assert body["grid"]["walls"] == [{"x": 1, "y": 1}, {"x": 2, "y": 1}]
    assert body["end"] == {"x": 3, "y": 2}


@pytest.mark.parametrize("payload", [
    {"rows": 2, "cols": 2, "walls": [{"x": 0, "y": 0}],
     "start": {"x": 0, "y": 0}, "end": {"x": 1, "y": 1}},
    {"rows": 2, "cols": 2, "start": {"x": 0, "y": 0}, "end": {"x": 5, "y": 1}},
    {"rows": 2, "cols": 2},
    {"text": "S.?\n..E"},
])
def test_bad_grid(client, payload):
    assert client.post("/api/pathfinding/grid", json=payload).status_code == 400


def test_toggle_wall(client):
    client.post("/api/pathfinding/grid", json={"text": "S..\n...\n..E"})
    r = client.post("/api/pathfinding/wall", json={"x": 1, "y": 0})
    assert r.status_code == 200
    assert r.get_json()["grid"]["walls"] == [{"x": 1, "y": 0}]

    assert client.post("/api/pathfinding/wall", json={"x": 0, "y": 0}).status_code == 400
    assert client.post("/api/pathfinding/wall", json={"x": 9, "y": 9}).status_code == 400


def test_move_endpoints(client):
    client.post("/api/pathfinding/grid", json={"text": "S.#\n...\n..E"})
    r = client.post("/api/pathfinding/endpoints", json={"start": {"x": 1, "y": 1}})
    assert r.status_code == 200
    assert r.get_json()["start"] == {"x": 1, "y": 1}
    r = client.post("/api/pathfinding/endpoints", json={"end": {"x": 2, "y": 0}})
    assert r.status_code == 400


# ---------------------------------------------------------------------------
# Conflicts with an active run
# ---------------------------------------------------------------------------
def test_sorting_conflicts_while_running(slow_app):
    client = slow_app.test_client()
    ws = _workspace(slow_app, "sorting")
    client.post("/api/sorting/array", json={"values": [3, 1, 2]})

    assert client.post("/api/sorting/start", json={"algorithm": "bubble"}).status_code == 202
    assert _wait_until(lambda: ws.busy)

    assert client.post("/api/sorting/start", json={"algorithm": "heap"}).status_code == 409
    assert client.post("/api/sorting/array", json={"values": [1]}).status_code == 409

    paused = client.post("/api/sorting/pause").get_json()
    assert paused["phase"] == "paused"
    resumed = client.post("/api/sorting/resume").get_json()
    assert resumed["phase"] == "running"

    body = client.post("/api/sorting/reset").get_json()
    assert body["state"]["phase"] == "idle"
    assert ws.run.join(1)
    assert body["data"]["working"] == [3, 1, 2]


def test_pathfinding_conflicts_while_running(slow_app):
    client = slow_app.test_client()
    ws = _workspace(slow_app, "pathfinding")

    assert client.post("/api/pathfinding/start", json={"algorithm": "bfs"}).status_code == 202
    assert _wait_until(lambda: ws.busy)

    assert client.post("/api/pathfinding/wall", json={"x": 5, "y": 5}).status_code == 409
    assert client.post("/api/pathfinding/grid", json={"text": "S.E"}).status_code == 409
    assert client.post("/api/pathfinding/endpoints",
                       json={"start": {"x": 0, "y": 0}}).status_code == 409

    client.post("/api/pathfinding/reset")
    assert ws.run.join(1)
    assert not ws.busy
