"""
Configuration
=============
Every tunable of the visualizer in one dataclass, read from the
environment with the VISUALIZER_ prefix:

    VISUALIZER_SPEED_LEVEL      default speed level, 1-10          (5)
    VISUALIZER_POLL_INTERVAL    max seconds per pause wait          (0.05)
    VISUALIZER_TIME_SCALE       multiplier on every step delay      (1.0)
    VISUALIZER_SORT_BASE_MS     sorting base delay                  (200)
    VISUALIZER_GRID_BASE_MS     path-finding base delay             (5000)
    VISUALIZER_MIN_BASE_MS      floor on either base delay          (10)
    VISUALIZER_SPEED_DECAY      delay multiplier per speed level    (0.7)
    VISUALIZER_SKIP_THRESHOLD   highest level that draws every step (3)
    VISUALIZER_SKIP_GROWTH      growth of the skip run above it     (3)
    VISUALIZER_LOG_LEVEL        logging level name                  (INFO)
    VISUALIZER_LOG_FILE         optional log file path              ("")
    VISUALIZER_HOST / _PORT     Flask bind address        (127.0.0.1:5000)
"""

import os
from dataclasses import dataclass

from engine.pacing import MAX_SPEED_LEVEL, MIN_SPEED_LEVEL, Pacing

ENV_PREFIX = "VISUALIZER_"


def _env(name: str, default: str) -> str:
    return os.environ.get(ENV_PREFIX + name, default)


@dataclass
class Settings:
    speed_level:    int   = 5
    poll_interval:  float = 0.05
    time_scale:     float = 1.0
    sort_base_ms:   float = 200.0
    grid_base_ms:   float = 5000.0
    min_base_ms:    float = 10.0
    speed_decay:    float = 0.7
    skip_threshold: int   = 3
    skip_growth:    int   = 3
    log_level:      str   = "INFO"
    log_file:       str   = ""
    host:           str   = "127.0.0.1"
    port:           int   = 5000

    @staticmethod
    def from_env() -> "Settings":
        settings = Settings(
            speed_level=int(_env("SPEED_LEVEL", "5")),
            poll_interval=float(_env("POLL_INTERVAL", "0.05")),
            time_scale=float(_env("TIME_SCALE", "1.0")),
            sort_base_ms=float(_env("SORT_BASE_MS", "200")),
            grid_base_ms=float(_env("GRID_BASE_MS", "5000")),
            min_base_ms=float(_env("MIN_BASE_MS", "10")),
            speed_decay=float(_env("SPEED_DECAY", "0.7")),
            skip_threshold=int(_env("SKIP_THRESHOLD", "3")),
            skip_growth=int(_env("SKIP_GROWTH", "3")),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            log_file=_env("LOG_FILE", ""),
            host=_env("HOST", "127.0.0.1"),
            port=int(_env("PORT", "5000")),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if not MIN_SPEED_LEVEL <= self.speed_level <= MAX_SPEED_LEVEL:
            raise ValueError(f"speed_level must be in [{MIN_SPEED_LEVEL}, {MAX_SPEED_LEVEL}], "
                             f"got {self.speed_level}")
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if self.time_scale < 0:
            raise ValueError("time_scale must not be negative")
        if not 0 < self.speed_decay < 1:
            raise ValueError("speed_decay must be between 0 and 1")
        if self.skip_growth < 1:
            raise ValueError("skip_growth must be at least 1")

    def sorting_pacing(self) -> Pacing:
        return self._pacing(self.sort_base_ms)

    def pathfinding_pacing(self) -> Pacing:
        return self._pacing(self.grid_base_ms)

    def _pacing(self, base_ms: float) -> Pacing:
        return Pacing(
            base_ms=base_ms,
            min_base_ms=self.min_base_ms,
            decay=self.speed_decay,
            skip_threshold=self.skip_threshold,
            skip_growth=self.skip_growth,
            time_scale=self.time_scale,
        )
