from __future__ import annotations

import math
from typing import Iterable, Optional, Tuple

from planners.grid import GridMap, line_of_sight, make_grid
from planners.search import Expansion, SearchNode, SearchState, run_search
from shared.types import Cell, Path2D, as_cell


def _euclid(a: Tuple[int, int], b: Tuple[int, int]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


class LineOfSightExpansion(Expansion):
    """
    Theta*-style expansion over plain 4-connected steps.

    Each walkable, not yet closed neighbor is relaxed through the current node.
    If the current node's parent can see the neighbor directly and that segment
    is at least `min_segment_length` long, the neighbor is re-parented onto the
    grandparent whenever this is strictly cheaper. Node identity is the position.
    """

    def __init__(self, min_segment_length: int):
        self.min_segment_length = min_segment_length

    def identity(self, node: SearchNode):
        return node.position

    def heuristic(self, a: Cell, b: Cell) -> float:
        return _euclid(a, b)

    def expand(self, state: SearchState, idx: int) -> None:
        current = state.arena[idx]
        parent_idx = current.parent
        parent = state.arena[parent_idx] if parent_idx is not None else None

        for pos in state.grid.neighbors(current.position):
            if pos in state.closed:
                continue

            g = current.g_cost + _euclid(current.position, pos)
            nidx = state.open.get(pos)
            if nidx is None:
                nidx = state.add(pos, SearchNode(pos, idx, g, self.heuristic(pos, state.goal)))
                changed = True
            else:
                node = state.arena[nidx]
                changed = g < node.g_cost
                if changed:
                    node.g_cost = g
                    node.parent = idx

            node = state.arena[nidx]
            if parent is not None and line_of_sight(state.grid, parent.position, pos):
                seg = _euclid(parent.position, pos)
                if seg >= self.min_segment_length:
                    shortcut = parent.g_cost + seg
                    if shortcut < node.g_cost:
                        node.g_cost = shortcut
                        node.parent = parent_idx
                        changed = True

            if changed:
                state.schedule(nidx)


def plan_zeta_on_grid(
    grid: GridMap, start: Cell, goal: Cell, min_segment_length: int
) -> Optional[Path2D]:
    return run_search(grid, start, goal, LineOfSightExpansion(min_segment_length)).path


def plan_zeta(
    cols: int,
    rows: int,
    obstacles: Iterable[Cell],
    start: Cell,
    goal: Cell,
    min_segment_length: int = 1,
) -> Optional[Path2D]:
    """Line-of-sight accelerated search ("Zeta").

    Consecutive cells of the returned path are either 4-neighbors or joined by an
    unobstructed straight segment at least min_segment_length long.
    """
    start, goal = as_cell(start), as_cell(goal)
    grid = make_grid(cols, rows, obstacles, start, goal, min_segment_length)
    return plan_zeta_on_grid(grid, start, goal, min_segment_length)
