from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional

from planners.astar import ConstrainedExpansion
from planners.grid import PlanningInputError, make_grid
from planners.search import Expansion, SearchOutcome, run_search
from planners.zeta import LineOfSightExpansion
from shared.types import Cell, Path2D, as_cell

ENGINES: Dict[str, Callable[[int], Expansion]] = {
    "constrained": ConstrainedExpansion,
    "zeta": LineOfSightExpansion,
}


def _expansion(engine: str, min_segment_length: int) -> Expansion:
    try:
        factory = ENGINES[engine]
    except KeyError:
        raise PlanningInputError(
            f"unknown engine {engine!r} (expected one of: {', '.join(sorted(ENGINES))})"
        ) from None
    return factory(min_segment_length)


def search(
    cols: int,
    rows: int,
    obstacles: Iterable[Cell],
    start: Cell,
    end: Cell,
    min_segment_length: int = 1,
    *,
    engine: str = "constrained",
) -> SearchOutcome:
    """Like find_path, but also reports how many nodes the search touched."""
    expansion = _expansion(engine, min_segment_length)
    start, end = as_cell(start), as_cell(end)
    grid = make_grid(cols, rows, obstacles, start, end, min_segment_length)
    return run_search(grid, start, end, expansion)


def find_path(
    cols: int,
    rows: int,
    obstacles: Iterable[Cell],
    start: Cell,
    end: Cell,
    min_segment_length: int = 1,
    *,
    engine: str = "constrained",
) -> Optional[Path2D]:
    """Route start->end with the named engine ("constrained" or "zeta").

    Returns the cell sequence (start and end included) or None when no path
    exists. Raises PlanningInputError for invalid input.
    """
    return search(
        cols, rows, obstacles, start, end, min_segment_length, engine=engine
    ).path
