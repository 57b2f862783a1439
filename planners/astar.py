from __future__ import annotations

from typing import Iterable, Optional, Tuple

from planners.grid import GridMap, make_grid
from planners.search import Expansion, SearchNode, SearchState, densify, run_search
from shared.types import DIRECTIONS, NONE, Cell, Path2D, as_cell, is_reverse, step


def _manhattan(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _on_segment(cell: Cell, a: Cell, b: Cell) -> bool:
    # a->b is axis-aligned (one straight or turn move)
    (x, y), (x0, y0), (x1, y1) = cell, a, b
    if x0 == x1 == x:
        return min(y0, y1) <= y <= max(y0, y1)
    if y0 == y1 == y:
        return min(x0, x1) <= x <= max(x0, x1)
    return False


class ConstrainedExpansion(Expansion):
    """
    Successors gated by the minimum-segment rule.

    Continuing straight (or leaving the start) moves one cell for cost 1.
    Turning is only legal once the current run is at least `min_segment_length`
    long, and then moves exactly that many cells in the new direction as one
    atomic step. Node identity is (position, direction).

    With `no_backtrack` (default) a move may not reverse the current direction
    nor cover any cell already on the route leading to the current node.
    """

    def __init__(self, min_segment_length: int, *, no_backtrack: bool = True):
        self.min_segment_length = int(min_segment_length)
        self.no_backtrack = no_backtrack

    def identity(self, node: SearchNode):
        return node.position, node.direction

    def heuristic(self, a: Cell, b: Cell) -> float:
        return float(_manhattan(a, b))

    def _on_route(self, state: SearchState, idx: int, cell: Cell) -> bool:
        for node in state.arena.lineage(idx):
            if node.parent is None:
                return node.position == cell
            if _on_segment(cell, state.arena[node.parent].position, node.position):
                return True
        return False

    def _moves(self, current: SearchNode) -> Iterable[Tuple[Cell, int, int]]:
        # (direction, cells to move, new segment length)
        L = self.min_segment_length
        for d in DIRECTIONS:
            if d == current.direction or current.direction == NONE:
                yield d, 1, current.segment_length + 1
            elif current.segment_length >= L:
                if self.no_backtrack and is_reverse(d, current.direction):
                    continue
                yield d, L, L

    def expand(self, state: SearchState, idx: int) -> None:
        current = state.arena[idx]
        for d, n, seg in self._moves(current):
            cells = [step(current.position, d, i) for i in range(1, n + 1)]
            if not all(state.grid.is_walkable(c) for c in cells):
                continue
            if self.no_backtrack and any(self._on_route(state, idx, c) for c in cells):
                continue

            pos = cells[-1]
            key = (pos, d)
            if key in state.closed:
                continue

            g = current.g_cost + n
            seen = state.open.get(key)
            if seen is not None and g >= state.arena[seen].g_cost:
                continue

            node = SearchNode(pos, idx, g, self.heuristic(pos, state.goal), d, seg)
            state.schedule(state.add(key, node))

    def finish(self, state: SearchState, idx: int) -> Path2D:
        return densify(super().finish(state, idx))


def plan_constrained_on_grid(
    grid: GridMap,
    start: Cell,
    goal: Cell,
    min_segment_length: int,
    *,
    no_backtrack: bool = True,
) -> Optional[Path2D]:
    expansion = ConstrainedExpansion(min_segment_length, no_backtrack=no_backtrack)
    return run_search(grid, start, goal, expansion).path


def plan_constrained(
    cols: int,
    rows: int,
    obstacles: Iterable[Cell],
    start: Cell,
    goal: Cell,
    min_segment_length: int = 1,
    *,
    no_backtrack: bool = True,
) -> Optional[Path2D]:
    """A* on a 4-connected grid where every turn needs a run of min_segment_length cells.

    Returns the unit-step path from start to goal inclusive, or None if the goal
    cannot be reached. Raises PlanningInputError on invalid input.
    """
    start, goal = as_cell(start), as_cell(goal)
    grid = make_grid(cols, rows, obstacles, start, goal, min_segment_length)
    return plan_constrained_on_grid(grid, start, goal, min_segment_length, no_backtrack=no_backtrack)
