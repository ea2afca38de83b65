from dataclasses import dataclass
from typing import NamedTuple


# ---------------------------------------------------------------------------
# Point — integer coordinate pair, hashable so it can key visited sets and
# predecessor maps directly.
# ---------------------------------------------------------------------------
class Point(NamedTuple):
    x: int
    y: int

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Point":
        return cls(int(data["x"]), int(data["y"]))


# ---------------------------------------------------------------------------
# Cell
# ---------------------------------------------------------------------------
@dataclass
class Cell:
    """
    Attributes:
        x, y    : Column / row of the cell inside its grid.
        blocked : Obstacle flag.  Search algorithms never enter a blocked cell.
    """

    x:       int
    y:       int
    blocked: bool = False

    def toggle_blocked(self) -> None:
        self.blocked = not self.blocked
