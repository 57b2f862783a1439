from __future__ import annotations

import argparse
import json
import os
import sys

from planners.config import load_planner_config, parse_cell
from planners.grid import PlanningInputError
from planners.layouts import LayoutStore
from planners.obstacles import ObstacleSet, example_walls
from planners.pathfinder import ENGINES, search
from planners.search import path_cost


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Plan a min-segment route on an occupancy grid")
    ap.add_argument("--config", default="configs/planner.yaml")
    ap.add_argument("--engine", choices=sorted(ENGINES), default=None)
    ap.add_argument("--min-segment", type=int, default=None, help="cells before a turn")
    ap.add_argument("--start", default=None, help="x,y")
    ap.add_argument("--end", default=None, help="x,y")
    ap.add_argument("--cols", type=int, default=None)
    ap.add_argument("--rows", type=int, default=None)
    ap.add_argument("--example-walls", action="store_true", help="add the demo wall block")
    ap.add_argument("--layout", default=None, help="saved layout key")
    ap.add_argument("--layouts-path", default=None)
    ap.add_argument("--json-out", default="artifacts/planner_path.json")
    args = ap.parse_args(argv)

    try:
        cfg = load_planner_config(args.config)
        cols = args.cols if args.cols is not None else cfg.cols
        rows = args.rows if args.rows is not None else cfg.rows
        start = parse_cell(args.start, "start") if args.start else cfg.start
        end = parse_cell(args.end, "end") if args.end else cfg.end
        min_seg = args.min_segment if args.min_segment is not None else cfg.min_segment_length
        engine = args.engine or cfg.engine
        layout = args.layout or cfg.layout

        walls = ObstacleSet()
        if layout:
            walls.replace(LayoutStore(args.layouts_path or cfg.layouts_path).load(layout))
        if args.example_walls:
            walls.replace(set(walls) | example_walls(cols, rows).snapshot())

        outcome = search(cols, rows, walls.snapshot(), start, end, min_seg, engine=engine)
    except (PlanningInputError, KeyError, ValueError) as e:
        print(f"[planner] invalid input: {e}", file=sys.stderr)
        return 2

    path = outcome.path
    out = {
        "engine": engine,
        "found": path is not None,
        "path": [list(c) for c in path] if path else [],
        "cost": path_cost(path) if path else None,
        "cells": len(path) if path else 0,
        "min_segment_length": min_seg,
        "start": list(start),
        "end": list(end),
        "obstacles": len(walls),
        "expanded": outcome.expanded,
    }
    os.makedirs(os.path.dirname(args.json_out) or ".", exist_ok=True)
    with open(args.json_out, "w") as f:
        json.dump(out, f, indent=2)

    if path is None:
        print(f"[planner] {engine}: no path from {start} to {end} (expanded {outcome.expanded})")
        print(f"Wrote: {args.json_out}")
        return 1
    print(
        f"[planner] {engine}: {len(path)} cells, cost {out['cost']:.2f}, "
        f"expanded {outcome.expanded}, min segment {min_seg}"
    )
    print(f"Wrote: {args.json_out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
