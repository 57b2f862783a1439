from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Optional

import yaml

from shared.types import Cell


@dataclass
class PlannerConfig:
    cols: int = 40
    rows: int = 25
    start: Cell = (2, 2)
    end: Cell = (37, 18)
    min_segment_length: int = 6
    engine: str = "constrained"
    layout: Optional[str] = None  # key into the layout store
    layouts_path: str = "artifacts/layouts.json"


def parse_cell(value: Any, name: str = "cell") -> Cell:
    """Accept "x,y", [x, y] or (x, y)."""
    try:
        if isinstance(value, str):
            x, y = (int(s) for s in value.split(","))
        else:
            x, y = (int(v) for v in value)
    except (TypeError, ValueError):
        raise ValueError(f"{name}: expected 'x,y' or [x, y], got {value!r}") from None
    return x, y


def _coerce(cfg: dict) -> dict:
    out = {}
    for key in ("cols", "rows", "min_segment_length"):
        if key in cfg:
            try:
                out[key] = int(cfg[key])
            except (TypeError, ValueError):
                raise ValueError(f"{key}: expected an integer, got {cfg[key]!r}") from None
    for key in ("start", "end"):
        if key in cfg:
            out[key] = parse_cell(cfg[key], key)
    for key in ("engine", "layouts_path"):
        if key in cfg:
            out[key] = str(cfg[key])
    if "layout" in cfg:
        out["layout"] = None if cfg["layout"] is None else str(cfg["layout"])
    return out


def load_planner_config(path: str | None) -> PlannerConfig:
    """Read planner settings from YAML; a missing file gives the defaults."""
    if not path or not os.path.exists(path):
        return PlannerConfig()
    with open(path, "r") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{path}: expected a mapping at top level")
    if "planner" in cfg:
        extra = sorted(set(cfg) - {"planner"})
        if extra:
            raise ValueError(f"{path}: keys outside the planner section: {', '.join(extra)}")
        cfg = cfg["planner"] or {}
        if not isinstance(cfg, dict):
            raise ValueError(f"{path}: planner section must be a mapping")
    known = {f.name for f in fields(PlannerConfig)}
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ValueError(f"{path}: unknown planner keys: {', '.join(unknown)}")
    return replace(PlannerConfig(), **_coerce(cfg))
