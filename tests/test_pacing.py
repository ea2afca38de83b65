import pytest

from engine import PATHFINDING_PACING, SORTING_PACING, Pacing, clamp_speed_level


@pytest.mark.parametrize("size, level, expected", [
    (5, 1, 136),       # floor(195 * 0.7)
    (5, 5, 32),        # floor(195 * 0.16807)
    (100, 3, 34),      # floor(100 * 0.343)
    (500, 1, 7),       # base floored at 10
    (500, 10, 1),      # never below 1 ms
])
def test_sorting_delay(size, level, expected):
    assert SORTING_PACING.delay_ms(size, level) == expected


def test_pathfinding_delay_uses_larger_base():
    assert PATHFINDING_PACING.delay_ms(375, 5) == 777
    assert PATHFINDING_PACING.delay_ms(375, 5) > SORTING_PACING.delay_ms(375, 5)


def test_delay_shrinks_with_level():
    delays = [SORTING_PACING.delay_ms(20, level) for level in range(1, 11)]
    assert delays == sorted(delays, reverse=True)


def test_delay_seconds_applies_ratio_and_time_scale():
    assert SORTING_PACING.delay_seconds(5, 1, ratio=0.5) == pytest.approx(0.068)
    assert Pacing(time_scale=0).delay_seconds(5, 1) == 0
    assert Pacing(time_scale=2).delay_seconds(5, 1) == pytest.approx(0.272)


@pytest.mark.parametrize("size, level, expected", [
    (100, 1, 0),
    (100, 3, 0),
    (100, 4, 3),
    (100, 5, 9),
    (100, 10, 100),    # 3 ** 7 capped by the problem size
    (0, 10, 1),
])
def test_skip_budget(size, level, expected):
    assert SORTING_PACING.skip_budget(size, level) == expected


@pytest.mark.parametrize("level, expected", [
    (-3, 1), (0, 1), (1, 1), (7, 7), (10, 10), (11, 10), (99, 10),
])
def test_clamp_speed_level(level, expected):
    assert clamp_speed_level(level) == expected


@pytest.mark.parametrize("bad", [None, "5", 2.5, True])
def test_clamp_rejects_non_integers(bad):
    with pytest.raises(ValueError):
        clamp_speed_level(bad)
