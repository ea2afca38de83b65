import pytest

from algorithms import SORTING, SortAlgorithm, list_algorithms
from algorithms.steps import always_running
from conftest import random_values


SORTS = [info.fn for info in list_algorithms(SORTING)]
SORT_IDS = [info.key.value for info in list_algorithms(SORTING)]

INPUTS = {
    "empty":       [],
    "single":      [7],
    "pair":        [2, 1],
    "sorted":      [1, 2, 3, 4, 5, 6],
    "reversed":    [9, 8, 7, 6, 5, 4, 3, 2, 1],
    "duplicates":  [3, 1, 3, 2, 1, 3, 2],
    "all_equal":   [4, 4, 4, 4],
    "negatives":   [-5, 3, -1, 0, 12, -7],
    "unit_floats": [0.5, 0.25, 0.999, 0.0, 0.75, 0.125],
    "large_ints":  [10 ** 9, 5, -3, 10 ** 12, 42],
    "close":       [0.1000002, 0.1000001, 0.1000003, 0.1000001],
    "mixed":       [2.5, -1, 3, 0.5, -0.25, 3],
    "huge_span":   [1e308, -1e308, 0.0, 5.0],
}


@pytest.mark.parametrize("sort", SORTS, ids=SORT_IDS)
@pytest.mark.parametrize("name", list(INPUTS))
def test_sort_produces_ascending_permutation(sort, name, recorder):
    data = list(INPUTS[name])
    sort(data, recorder, always_running)
    assert data == sorted(INPUTS[name])


@pytest.mark.parametrize("sort", SORTS, ids=SORT_IDS)
def test_sort_random_input(sort, recorder):
    values = random_values(200, seed=11)
    data = list(values)
    sort(data, recorder, always_running)
    assert data == sorted(values)


@pytest.mark.parametrize("sort", SORTS, ids=SORT_IDS)
def test_algorithm_never_marks_sorted(sort, recorder):
    sort([3, 1, 2], recorder, always_running)
    assert recorder.of_kind("mark_sorted") == []


def test_all_twelve_sorts_are_registered():
    assert len(SORTS) == 12 == len(SortAlgorithm)


def test_bubble_sort_compare_order(recorder):
    from algorithms.sorting import bubble_sort

    data = [5, 3, 4, 1, 2]
    bubble_sort(data, recorder, always_running)

    assert data == [1, 2, 3, 4, 5]
    assert [e.indices for e in recorder.of_kind("compare")] == [
        (0, 1), (1, 2), (2, 3), (3, 4),
        (0, 1), (1, 2), (2, 3),
        (0, 1), (1, 2),
        (0, 1),
    ]


def test_reported_swaps_replay_to_the_result(recorder):
    from algorithms.sorting import quick_sort

    values = random_values(60, seed=3)
    data = list(values)
    quick_sort(data, recorder, always_running)

    replay = list(values)
    for e in recorder.of_kind("swap"):
        i, j = e.indices
        replay[i], replay[j] = replay[j], replay[i]
    assert replay == data == sorted(values)


def test_reported_updates_replay_to_the_result(recorder):
    from algorithms.sorting import merge_sort

    values = random_values(40, seed=5)
    data = list(values)
    merge_sort(data, recorder, always_running)

    replay = list(values)
    for e in recorder.of_kind("update"):
        replay[e.indices[0]] = e.value
    assert replay == data


def test_quick_sort_handles_long_sorted_input(recorder):
    from algorithms.sorting import quick_sort

    data = list(range(3000))
    quick_sort(data, recorder, always_running)
    assert data == list(range(3000))


@pytest.mark.parametrize("sort", SORTS, ids=SORT_IDS)
def test_sort_stops_soon_after_cancellation(sort, recorder, countdown):
    liveness = countdown(25)
    data = random_values(80, seed=2)
    sort(data, recorder, liveness)

    assert liveness.events_at_cancel is not None
    assert len(recorder) - liveness.events_at_cancel <= 3
