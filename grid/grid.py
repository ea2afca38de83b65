"""
grid.py — Grid Container
=========================
Single source of truth for the path-finding board.  Algorithms, the
controller and the API all talk to this object.

Responsibilities:
  1. Cell storage, indexed grid[y][x]
  2. Adjacency queries                     (neighbours, in_bounds, …)
  3. Wall editing                          (set_blocked / toggle)
  4. Import from an ASCII map              (text → grid)
  5. Serialisation round-trip              (to_dict / from_dict)

Design decisions:
  - Identity is value-based: two grids are equal when their dimensions and
    blocked flags match.  The controller keeps its own copy() so a display
    copy held by the caller can never be mutated underneath a run.
  - Dimensions are fixed at construction.  Replacing the board means
    building a new Grid.
  - Neighbours are 4-connected and always returned in the order
    up, down, left, right.  Step order of every search depends on it.
"""

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from grid.point import Cell, Point


# up, down, left, right as (dx, dy)
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))

WALL_GLYPH  = "#"
OPEN_GLYPH  = "."
START_GLYPH = "S"
END_GLYPH   = "E"


class Grid:
    """
    Attributes:
        cells : rows × cols list of Cell, cells[y][x].
    """

    def __init__(self, cells: List[List[Cell]]):
        if not cells or not cells[0]:
            raise ValueError("Grid must have at least one row and one column")
        width = len(cells[0])
        for row in cells:
            if len(row) != width:
                raise ValueError("Grid rows must all have the same length")
        self.cells: List[List[Cell]] = cells

    # ==================================================================
    # FACTORIES
    # ==================================================================
    @classmethod
    def empty(cls, rows: int, cols: int) -> "Grid":
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid size must be positive, got {rows}x{cols}")
        return cls([[Cell(x, y) for x in range(cols)] for y in range(rows)])

    @classmethod
    def from_rows(cls, blocked_rows: Sequence[Sequence[bool]]) -> "Grid":
        """Build from a row-major matrix of blocked flags."""
        return cls([
            [Cell(x, y, bool(flag)) for x, flag in enumerate(row)]
            for y, row in enumerate(blocked_rows)
        ])

    @classmethod
    def from_walls(cls, rows: int, cols: int, walls: Iterable[Point]) -> "Grid":
        grid = cls.empty(rows, cols)
        for p in walls:
            p = Point(*p)
            if not grid.in_bounds(p):
                raise ValueError(f"Wall {tuple(p)} is outside a {rows}x{cols} grid")
            grid.set_blocked(p, True)
        return grid

    @classmethod
    def from_text(cls, text: str) -> Tuple["Grid", Optional[Point], Optional[Point]]:
        """
        Parse an ASCII map.  One line per row:

            S..#
            .#.#
            ...E

        '#' is a wall, '.' is open, 'S' / 'E' mark the endpoints (optional).
        Blank lines and surrounding whitespace are ignored.

        Returns (grid, start, end); start / end are None when not marked.
        """
        lines = [ln.strip() for ln in text.strip().splitlines() if ln.strip()]
        start: Optional[Point] = None
        end:   Optional[Point] = None
        rows: List[List[Cell]] = []

        for y, line in enumerate(lines):
            row: List[Cell] = []
            for x, ch in enumerate(line):
                if ch == WALL_GLYPH:
                    row.append(Cell(x, y, True))
                    continue
                if ch == START_GLYPH:
                    start = Point(x, y)
                elif ch == END_GLYPH:
                    end = Point(x, y)
                elif ch != OPEN_GLYPH:
                    raise ValueError(f"Unknown map glyph {ch!r} at ({x}, {y})")
                row.append(Cell(x, y, False))
            rows.append(row)

        return cls(rows), start, end

    # ==================================================================
    # QUERIES
    # ==================================================================
    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])

    @property
    def size(self) -> int:
        """Cell count — the problem size the pacing layer scales by."""
        return self.rows * self.cols

    def in_bounds(self, p: Point) -> bool:
        return 0 <= p.x < self.cols and 0 <= p.y < self.rows

    def is_blocked(self, p: Point) -> bool:
        return self.cells[p.y][p.x].blocked

    def neighbours(self, p: Point) -> List[Point]:
        """Open, in-bounds 4-neighbours of p (up, down, left, right)."""
        result = []
        for dx, dy in DIRECTIONS:
            nbr = Point(p.x + dx, p.y + dy)
            if self.in_bounds(nbr) and not self.cells[nbr.y][nbr.x].blocked:
                result.append(nbr)
        return result

    def points(self) -> Iterator[Point]:
        """Every point in row-major order."""
        for y in range(self.rows):
            for x in range(self.cols):
                yield Point(x, y)

    def walls(self) -> List[Point]:
        return [p for p in self.points() if self.is_blocked(p)]

    # ==================================================================
    # MUTATION
    # ==================================================================
    def set_blocked(self, p: Point, blocked: bool) -> None:
        self.cells[p.y][p.x].blocked = blocked

    def toggle(self, p: Point) -> None:
        self.cells[p.y][p.x].toggle_blocked()

    def copy(self) -> "Grid":
        return Grid([[Cell(c.x, c.y, c.blocked) for c in row] for row in self.cells])

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "rows":  self.rows,
            "cols":  self.cols,
            "walls": [p.to_dict() for p in self.walls()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Grid":
        walls = [Point.from_dict(w) for w in data.get("walls", [])]
        return cls.from_walls(int(data["rows"]), int(data["cols"]), walls)

    def to_text(self, start: Optional[Point] = None, end: Optional[Point] = None) -> str:
        lines = []
        for y in range(self.rows):
            chars = []
            for x in range(self.cols):
                p = Point(x, y)
                if p == start:
                    chars.append(START_GLYPH)
                elif p == end:
                    chars.append(END_GLYPH)
                elif self.is_blocked(p):
                    chars.append(WALL_GLYPH)
                else:
                    chars.append(OPEN_GLYPH)
            lines.append("".join(chars))
        return "\n".join(lines)

    # ==================================================================
    # Dunder
    # ==================================================================
    def __getitem__(self, y: int) -> List[Cell]:
        return self.cells[y]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        if self.rows != other.rows or self.cols != other.cols:
            return False
        return all(
            a.blocked == b.blocked
            for row_a, row_b in zip(self.cells, other.cells)
            for a, b in zip(row_a, row_b)
        )

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols}, walls={len(self.walls())})"
