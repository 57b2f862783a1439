from __future__ import annotations

from typing import List, Tuple

# Grid frame: x grows to the right (columns), y grows downward (rows).

Cell = Tuple[int, int]  # (x, y)
Path2D = List[Cell]  # grid cells (x, y), start first

UP: Cell = (0, -1)
DOWN: Cell = (0, 1)
LEFT: Cell = (-1, 0)
RIGHT: Cell = (1, 0)
NONE: Cell = (0, 0)  # start state, no travel direction yet

DIRECTIONS: Tuple[Cell, ...] = (UP, DOWN, LEFT, RIGHT)


def step(cell: Cell, direction: Cell, n: int = 1) -> Cell:
    return cell[0] + direction[0] * n, cell[1] + direction[1] * n


def is_reverse(a: Cell, b: Cell) -> bool:
    return a == (-b[0], -b[1]) and a != NONE


def as_cell(value) -> Cell:
    """Normalize an (x, y) pair (tuple, list, numpy ints) to a tuple of ints."""
    x, y = value
    return int(x), int(y)
