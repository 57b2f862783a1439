"""
Best-first search scaffolding shared by the grid engines.

Nodes live in an arena (a plain list) and point at their predecessor by index,
so an engine may rewrite a node's cost and parent in place without aliasing.
The frontier is a binary heap of (f_cost, insertion order, node index); entries
made stale by a later, cheaper push are dropped when their identity is already
closed. Engines plug in through an `Expansion` that defines node identity, the
heuristic and successor generation.
"""

from __future__ import annotations

import heapq
import itertools
import math
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterator, List, Optional, Set

from planners.grid import GridMap
from shared.types import NONE, Cell, Path2D


@dataclass
class SearchNode:
    position: Cell
    parent: Optional[int]  # arena index of the predecessor, None for the start
    g_cost: float
    h_cost: float
    direction: Cell = NONE
    segment_length: int = 0

    @property
    def f_cost(self) -> float:
        return self.g_cost + self.h_cost


class NodeArena:
    """Owns every node of one search; parents are integer handles into it."""

    def __init__(self) -> None:
        self.nodes: List[SearchNode] = []

    def add(self, node: SearchNode) -> int:
        self.nodes.append(node)
        return len(self.nodes) - 1

    def __getitem__(self, idx: int) -> SearchNode:
        return self.nodes[idx]

    def __len__(self) -> int:
        return len(self.nodes)

    def lineage(self, idx: Optional[int]) -> Iterator[SearchNode]:
        """Yield the node at idx, then its parent, and so on up to the start."""
        while idx is not None:
            node = self.nodes[idx]
            yield node
            idx = node.parent


class Frontier:
    """Min-heap on f_cost; equal f_cost pops in insertion order."""

    def __init__(self) -> None:
        self._heap: list[tuple[float, int, int]] = []
        self._order = itertools.count()

    def push(self, f_cost: float, idx: int) -> None:
        heapq.heappush(self._heap, (f_cost, next(self._order), idx))

    def pop(self) -> int:
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)


@dataclass
class SearchState:
    """Per-invocation collections, handed to the expansion at every step."""

    grid: GridMap
    goal: Cell
    arena: NodeArena = field(default_factory=NodeArena)
    frontier: Frontier = field(default_factory=Frontier)
    open: Dict[Hashable, int] = field(default_factory=dict)
    closed: Set[Hashable] = field(default_factory=set)

    def add(self, key: Hashable, node: SearchNode) -> int:
        idx = self.arena.add(node)
        self.open[key] = idx
        return idx

    def schedule(self, idx: int) -> None:
        self.frontier.push(self.arena[idx].f_cost, idx)


class Expansion:
    """Successor strategy for `run_search`."""

    def identity(self, node: SearchNode) -> Hashable:
        raise NotImplementedError

    def heuristic(self, a: Cell, b: Cell) -> float:
        raise NotImplementedError

    def expand(self, state: SearchState, idx: int) -> None:
        raise NotImplementedError

    def finish(self, state: SearchState, idx: int) -> Path2D:
        return reconstruct_path(state.arena, idx)


@dataclass
class SearchOutcome:
    path: Optional[Path2D]
    expanded: int = 0  # nodes taken off the frontier and expanded
    generated: int = 0  # nodes created in the arena


def run_search(grid: GridMap, start: Cell, goal: Cell, expansion: Expansion) -> SearchOutcome:
    """Best-first search until goal is popped or the frontier runs dry."""
    state = SearchState(grid, goal)
    root = SearchNode(start, None, 0.0, expansion.heuristic(start, goal))
    state.schedule(state.add(expansion.identity(root), root))

    expanded = 0
    while state.frontier:
        idx = state.frontier.pop()
        node = state.arena[idx]
        key = expansion.identity(node)
        if key in state.closed:
            continue
        state.closed.add(key)

        if node.position == goal:
            return SearchOutcome(expansion.finish(state, idx), expanded, len(state.arena))

        expansion.expand(state, idx)
        expanded += 1

    return SearchOutcome(None, expanded, len(state.arena))


def reconstruct_path(arena: NodeArena, idx: int) -> Path2D:
    path = [node.position for node in arena.lineage(idx)]
    path.reverse()
    return path


def densify(path: Path2D) -> Path2D:
    """Expand axis-aligned jumps into unit steps, e.g. [(0,0),(3,0)] -> (0,0)..(3,0)."""
    if len(path) < 2:
        return list(path)
    out = [path[0]]
    for (x0, y0), (x1, y1) in zip(path, path[1:]):
        if x0 != x1 and y0 != y1:
            raise ValueError(f"cannot densify diagonal segment {(x0, y0)}->{(x1, y1)}")
        n = abs(x1 - x0) + abs(y1 - y0)
        sx = (x1 > x0) - (x1 < x0)
        sy = (y1 > y0) - (y1 < y0)
        out.extend((x0 + sx * i, y0 + sy * i) for i in range(1, n + 1))
    return out


def path_cost(path: Path2D) -> float:
    """Sum of Euclidean segment lengths; 0.0 for a single cell."""
    return float(sum(math.hypot(b[0] - a[0], b[1] - a[1]) for a, b in zip(path, path[1:])))
