#!/usr/bin/env python3
"""
layouts.py: manage saved obstacle layouts

Usage:
  python -m scripts.tools.layouts list
  python -m scripts.tools.layouts save --rect 5,0,8,12 --rect 20,4,22,24
  python -m scripts.tools.layouts save --example-walls --cols 40 --rows 25 --key demo
  python -m scripts.tools.layouts remove demo
"""

from __future__ import annotations

import argparse
import sys

from planners.layouts import LayoutStore
from planners.obstacles import ObstacleSet, example_walls


def parse_rect(text: str):
    try:
        x0, y0, x1, y1 = (int(s) for s in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected x0,y0,x1,y1, got {text!r}") from None
    return (x0, y0), (x1, y1)


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="List, save or remove saved obstacle layouts")
    ap.add_argument("--path", default="artifacts/layouts.json")
    sub = ap.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list")

    sp = sub.add_parser("save")
    sp.add_argument("--rect", type=parse_rect, action="append", default=[])
    sp.add_argument("--example-walls", action="store_true")
    sp.add_argument("--cols", type=int, default=40)
    sp.add_argument("--rows", type=int, default=25)
    sp.add_argument("--key", default=None)

    rp = sub.add_parser("remove")
    rp.add_argument("key")

    args = ap.parse_args(argv)
    store = LayoutStore(args.path)

    if args.cmd == "list":
        for key in store.keys():
            print(f"{key}\t{len(store.load(key))} cells")
        print(f"[layouts] {len(store)} layout(s) in {args.path}")
        return 0

    if args.cmd == "save":
        walls = example_walls(args.cols, args.rows) if args.example_walls else ObstacleSet()
        for a, b in args.rect:
            walls.set_rect(a, b)
        if not len(walls):
            print("[layouts] nothing to save (use --rect or --example-walls)", file=sys.stderr)
            return 2
        key = store.save(walls, key=args.key)
        print(f"[layouts] saved {len(walls)} cells as {key}")
        return 0

    store.remove(args.key)
    print(f"[layouts] removed {args.key}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
