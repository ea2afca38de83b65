"""
pacing.py — Step Delay & Render Skipping
==========================================
How long to hold each reported step, and how many steps to leave
un-rendered, as a function of speed level and problem size.

    delay_ms = max(1, floor(base_delay(size) * decay ** level))
    base_delay(size) = max(base_ms - size, min_base_ms)

Larger inputs start from a smaller base so they stay watchable; every
speed level multiplies the delay by `decay` (0.7).

Above `skip_threshold` the controller also stops rendering runs of
consecutive steps: after each rendered step, the next
min(skip_growth ** (level - skip_threshold), size) are skipped.  The
algorithm still executes every one of them.
"""

import math
from dataclasses import dataclass

MIN_SPEED_LEVEL = 1
MAX_SPEED_LEVEL = 10


def clamp_speed_level(level: int) -> int:
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValueError(f"Speed level must be an integer, got {level!r}")
    return max(MIN_SPEED_LEVEL, min(MAX_SPEED_LEVEL, level))


@dataclass(frozen=True)
class Pacing:
    """
    Attributes:
        base_ms        : Base delay before the size discount.
        min_base_ms    : Floor on the base delay for very large inputs.
        decay          : Per-level delay multiplier.
        skip_threshold : Highest speed level that renders every step.
        skip_growth    : Growth rate of the skip run above the threshold.
        time_scale     : Multiplier on every wait; 0 turns waiting off.
    """

    base_ms:        float = 200.0
    min_base_ms:    float = 10.0
    decay:          float = 0.7
    skip_threshold: int   = 3
    skip_growth:    int   = 3
    time_scale:     float = 1.0

    def delay_ms(self, problem_size: int, speed_level: int) -> int:
        base = max(self.base_ms - problem_size, self.min_base_ms)
        return max(1, math.floor(base * self.decay ** speed_level))

    def delay_seconds(self, problem_size: int, speed_level: int, ratio: float = 1.0) -> float:
        return self.delay_ms(problem_size, speed_level) * ratio * self.time_scale / 1000.0

    def skip_budget(self, problem_size: int, speed_level: int) -> int:
        """Number of steps left un-rendered after each rendered one."""
        if speed_level <= self.skip_threshold:
            return 0
        return min(self.skip_growth ** (speed_level - self.skip_threshold), max(problem_size, 1))


# Constants of the two families
SORTING_PACING     = Pacing(base_ms=200.0)
PATHFINDING_PACING = Pacing(base_ms=5000.0)
