import pytest

from algorithms import (
    PATHFINDING, REGISTRY, SORTING, SearchAlgorithm, SortAlgorithm,
    get_algorithm, list_algorithms, resolve,
)


def test_registry_covers_every_enum_member():
    assert set(REGISTRY) == set(SortAlgorithm) | set(SearchAlgorithm)
    assert len(REGISTRY) == 19


def test_list_by_family():
    assert len(list_algorithms()) == 19
    assert {a.family for a in list_algorithms(SORTING)} == {SORTING}
    assert [a.key for a in list_algorithms(PATHFINDING)] == list(SearchAlgorithm)


@pytest.mark.parametrize("key", ["bfs", SearchAlgorithm.BFS])
def test_get_algorithm_by_name_or_member(key):
    info = get_algorithm(key)
    assert info.key is SearchAlgorithm.BFS
    assert info.family == PATHFINDING


def test_get_algorithm_with_family():
    assert get_algorithm("quick", SORTING).key is SortAlgorithm.QUICK
    with pytest.raises(ValueError):
        get_algorithm("quick", PATHFINDING)
    with pytest.raises(ValueError):
        get_algorithm(SearchAlgorithm.DFS, SORTING)


def test_unknown_name():
    with pytest.raises(ValueError):
        get_algorithm("bogo")


def test_resolve():
    def custom(array, steps, liveness):
        pass

    assert resolve(None, SORTING) is None
    assert resolve(custom, SORTING) is custom
    assert resolve(SortAlgorithm.HEAP, SORTING) is REGISTRY[SortAlgorithm.HEAP].fn
    with pytest.raises(TypeError):
        resolve("heap", SORTING)


def test_card_to_dict():
    card = get_algorithm(SearchAlgorithm.ASTAR).to_dict()
    assert card["key"] == "astar"
    assert card["family"] == PATHFINDING
    assert "shortest-path" in card["tags"]
    assert "fn" not in card
