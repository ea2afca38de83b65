"""
grid/
-----
Core data layer.  Public API:

    from grid import Grid, Cell, Point
"""

from grid.point import Point, Cell
from grid.grid  import Grid

__all__ = [
    "Point",
    "Cell",
    "Grid",
]
