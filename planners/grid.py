from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterable, Iterator, List

from shared.types import DIRECTIONS, Cell


class PlanningInputError(ValueError):
    """Caller input that no search can be run on (as opposed to "no path")."""


@dataclass(frozen=True)
class GridMap:
    """Point-in-time view of a cols x rows grid and its blocked cells."""

    cols: int
    rows: int
    obstacles: AbstractSet[Cell] = frozenset()

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.cols and 0 <= y < self.rows

    def is_walkable(self, cell: Cell) -> bool:
        return self.in_bounds(cell) and cell not in self.obstacles

    def neighbors(self, cell: Cell) -> Iterator[Cell]:
        """Walkable 4-connected neighbors, in up/down/left/right order."""
        x, y = cell
        for dx, dy in DIRECTIONS:
            n = (x + dx, y + dy)
            if self.is_walkable(n):
                yield n


def make_grid(
    cols: int,
    rows: int,
    obstacles: Iterable[Cell],
    start: Cell,
    end: Cell,
    min_segment_length: int,
) -> GridMap:
    """Validate search inputs eagerly and freeze the obstacle set."""
    if cols <= 0 or rows <= 0:
        raise PlanningInputError("grid dimensions must be positive")
    if min_segment_length < 1:
        raise PlanningInputError("min_segment_length must be >= 1")
    grid = GridMap(int(cols), int(rows), frozenset((int(x), int(y)) for x, y in obstacles))
    if not (grid.in_bounds(start) and grid.in_bounds(end)):
        raise PlanningInputError("start/goal out of bounds")
    if start in grid.obstacles or end in grid.obstacles:
        raise PlanningInputError("start/goal on obstacle")
    return grid


def bresenham(a: Cell, b: Cell) -> List[Cell]:
    """Cells crossed by the segment a->b, both ends included.

    Ties step strictly (x only when 2*err > -dy, y only when 2*err < dx), so
    (0, 0)->(2, 1) stays on the start row for the tie: (1, 0), not (1, 1).
    """
    (x, y), (x1, y1) = a, b
    dx, dy = abs(x1 - x), abs(y1 - y)
    sx = 1 if x < x1 else -1
    sy = 1 if y < y1 else -1
    err = dx - dy
    cells = [(x, y)]
    while (x, y) != (x1, y1):
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
        cells.append((x, y))
    return cells


def line_of_sight(grid: GridMap, a: Cell, b: Cell) -> bool:
    """True if every cell on the rasterized segment a->b is walkable."""
    return all(grid.is_walkable(c) for c in bresenham(a, b))
