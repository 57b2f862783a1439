from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator, Optional, Set

import numpy as np

from shared.types import Cell


class ObstacleSet:
    """Editable set of blocked cells; engines only ever read a snapshot()."""

    def __init__(self, cells: Optional[Iterable[Cell]] = None):
        self._cells: Set[Cell] = set()
        if cells is not None:
            self.replace(cells)

    def add(self, cell: Cell) -> None:
        self._cells.add((int(cell[0]), int(cell[1])))

    def remove(self, cell: Cell) -> None:
        self._cells.discard((int(cell[0]), int(cell[1])))

    def clear(self) -> None:
        self._cells.clear()

    def set_rect(self, a: Cell, b: Cell, blocked: bool = True) -> None:
        """Block (or clear) the inclusive rectangle spanned by corners a and b."""
        x0, x1 = sorted((int(a[0]), int(b[0])))
        y0, y1 = sorted((int(a[1]), int(b[1])))
        rect = {(x, y) for x in range(x0, x1 + 1) for y in range(y0, y1 + 1)}
        if blocked:
            self._cells |= rect
        else:
            self._cells -= rect

    def replace(self, cells: Iterable[Cell]) -> None:
        self._cells = {(int(x), int(y)) for x, y in cells}

    def snapshot(self) -> FrozenSet[Cell]:
        return frozenset(self._cells)

    def __contains__(self, cell) -> bool:
        return tuple(cell) in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(sorted(self._cells))

    # --- numpy interop (occ[y][x] == 1 means obstacle) ---
    @classmethod
    def from_occupancy(cls, occ) -> "ObstacleSet":
        ys, xs = np.nonzero(np.asarray(occ))
        return cls(zip(xs.tolist(), ys.tolist()))

    def to_occupancy(self, cols: int, rows: int) -> np.ndarray:
        occ = np.zeros((rows, cols), dtype=int)
        for x, y in self._cells:
            if 0 <= x < cols and 0 <= y < rows:
                occ[y, x] = 1
        return occ


def example_walls(cols: int, rows: int) -> ObstacleSet:
    """Demo layout: a wide block with a single-row gap at y == rows - 10."""
    walls = ObstacleSet()
    for x in range(5, cols - 6):
        for y in range(0, rows - 4):
            if y != rows - 10:
                walls.add((x, y))
    return walls
