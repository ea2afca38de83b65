from algorithms.steps import VisitRecord
from engine import StepRecorder
from grid import Point


def test_events_are_numbered_in_order(recorder):
    recorder.compare(0, 1)
    recorder.swap(0, 1)
    recorder.update(2, 7.5)
    recorder.mark_sorted()

    events = recorder.events
    assert [e.step_number for e in events] == [0, 1, 2, 3]
    assert [e.kind for e in events] == ["compare", "swap", "update", "mark_sorted"]
    assert events[2].indices == (2,) and events[2].value == 7.5


def test_events_since(recorder):
    for i in range(5):
        recorder.compare(i, i)
    assert [e.step_number for e in recorder.events_since(3)] == [3, 4]
    assert len(recorder.events_since(-2)) == 5
    assert recorder.events_since(10) == []


def test_sort_metrics(recorder):
    recorder.compare(0, 1)
    recorder.compare(1, 2)
    recorder.swap(1, 2)
    recorder.update(0, 1.0)
    recorder.mark_sorted()

    m = recorder.metrics()
    assert (m.compares, m.swaps, m.updates, m.total_steps) == (2, 1, 1, 5)
    assert m.sorted_marked
    assert not m.path_found


def test_search_metrics(recorder):
    a, b, c = Point(0, 0), Point(1, 0), Point(2, 0)
    recorder.visit(VisitRecord(a, None))
    recorder.visit(VisitRecord(b, a))
    recorder.update_distance(b, 1)
    recorder.visit(VisitRecord(c, b))
    recorder.mark_path([a, b, c])

    m = recorder.metrics()
    assert (m.visits, m.distance_updates) == (3, 1)
    assert m.path_found and m.path_length == 2


def test_metrics_count_only_since_last_reset(recorder):
    recorder.compare(0, 1)
    recorder.swap(0, 1)
    recorder.reset()
    recorder.compare(2, 3)

    m = recorder.metrics()
    assert m.compares == 1 and m.swaps == 0
    assert m.total_steps == 1
    assert len(recorder) == 4


def test_clear(recorder):
    recorder.compare(0, 1)
    recorder.clear()
    assert len(recorder) == 0
    assert recorder.metrics().total_steps == 0
    recorder.compare(0, 1)
    assert recorder.events[0].step_number == 0


def test_on_step_callback_sees_each_event():
    seen = []
    recorder = StepRecorder(on_step=seen.append)
    recorder.compare(0, 1)
    recorder.mark_path([Point(0, 0)])
    assert [e.kind for e in seen] == ["compare", "mark_path"]


def test_event_to_dict():
    recorder = StepRecorder()
    recorder.visit(VisitRecord(Point(1, 2), Point(1, 1)))
    recorder.mark_path([Point(0, 0), Point(0, 1)])
    recorder.swap(3, 4)

    visit, path, swap = [e.to_dict() for e in recorder.events]
    assert visit == {"step": 0, "kind": "visit",
                     "point": {"x": 1, "y": 2}, "came_from": {"x": 1, "y": 1}}
    assert path == {"step": 1, "kind": "mark_path",
                    "path": [{"x": 0, "y": 0}, {"x": 0, "y": 1}]}
    assert swap == {"step": 2, "kind": "swap", "indices": [3, 4]}
