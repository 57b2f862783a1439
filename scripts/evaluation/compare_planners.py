from __future__ import annotations

import argparse
import time
from datetime import datetime
from pathlib import Path

import numpy as np
import pandas as pd

from planners.obstacles import ObstacleSet
from planners.pathfinder import ENGINES, search
from planners.search import path_cost


def random_walls(cols: int, rows: int, density: float, seed: int) -> ObstacleSet:
    """Seeded occupancy grid; the two corners used as start/end stay free."""
    rng = np.random.default_rng(seed)
    occ = (rng.random((rows, cols)) < density).astype(int)
    occ[0, 0] = 0
    occ[rows - 1, cols - 1] = 0
    return ObstacleSet.from_occupancy(occ)


def run_case(cols: int, rows: int, walls: ObstacleSet, min_seg: int, engine: str) -> dict:
    start, end = (0, 0), (cols - 1, rows - 1)
    t0 = time.perf_counter()
    outcome = search(cols, rows, walls.snapshot(), start, end, min_seg, engine=engine)
    ms = (time.perf_counter() - t0) * 1000.0
    path = outcome.path
    return {
        "engine": engine,
        "found": path is not None,
        "cells": len(path) if path else 0,
        "cost": path_cost(path) if path else float("nan"),
        "expanded": outcome.expanded,
        "generated": outcome.generated,
        "ms": ms,
    }


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """One row per engine; means cover found paths only (NaN if none found)."""
    agg = df.groupby("engine").agg(
        runs=("seed", "count"),
        no_path=("found", lambda s: int((~s.astype(bool)).sum())),
    )
    means = df[df["found"]].groupby("engine").agg(
        cost_mean=("cost", "mean"),
        cells_mean=("cells", "mean"),
        expanded_mean=("expanded", "mean"),
        ms_mean=("ms", "mean"),
    )
    return agg.join(means).reset_index()


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Compare constrained A* vs Zeta over random grids.")
    ap.add_argument("--seeds", type=int, default=10)
    ap.add_argument("--cols", type=int, default=30)
    ap.add_argument("--rows", type=int, default=20)
    ap.add_argument("--density", type=float, default=0.2, help="obstacle probability per cell")
    ap.add_argument("--min-segment", type=int, default=1)
    ap.add_argument("--out", default="artifacts/compare_planners.md")
    ap.add_argument("--csv-out", default="artifacts/compare_planners.csv")
    args = ap.parse_args(argv)

    rows = []
    for sd in range(args.seeds):
        walls = random_walls(args.cols, args.rows, args.density, sd)
        for engine in sorted(ENGINES):
            r = run_case(args.cols, args.rows, walls, args.min_segment, engine)
            r["seed"] = sd
            rows.append(r)
    df = pd.DataFrame(rows)

    # per-seed cost comparison where both engines found a path
    wide = df[df["found"]].pivot(index="seed", columns="engine", values="cost")
    zeta_worse = 0
    if {"zeta", "constrained"} <= set(wide.columns):
        both = wide[["zeta", "constrained"]].dropna()
        zeta_worse = int((both["zeta"] > both["constrained"] + 1e-9).sum())

    summary = summarize(df)
    Path(args.csv_out).parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(args.csv_out, index=False)

    lines = []
    ts = datetime.now().isoformat(timespec="seconds")
    lines.append(f"# Planner Compare ({ts})\n")
    lines.append(
        f"- grid {args.cols}x{args.rows}, density {args.density}, "
        f"min segment {args.min_segment}, seeds {args.seeds}"
    )
    lines.append(f"- per-run CSV: `{args.csv_out}`")
    lines.append(f"- seeds where zeta cost > constrained cost: {zeta_worse}\n")
    lines.append("| engine | runs | no path | cost | cells | expanded | ms |")
    lines.append("|:------:|-----:|--------:|-----:|------:|---------:|---:|")
    for r in summary.itertuples(index=False):
        lines.append(
            f"| {r.engine} | {r.runs} | {int(r.no_path)} | {r.cost_mean:.2f} | "
            f"{r.cells_mean:.1f} | {r.expanded_mean:.1f} | {r.ms_mean:.2f} |"
        )
    lines.append("")

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text("\n".join(lines))
    print(f"[compare] Wrote: {out_path}")
    print("\n".join(lines))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
