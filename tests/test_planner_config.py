from pathlib import Path

import pytest

from planners.config import PlannerConfig, load_planner_config, parse_cell


def test_missing_config_gives_defaults(tmp_path):
    assert load_planner_config(None) == PlannerConfig()
    assert load_planner_config(str(tmp_path / "nope.yaml")) == PlannerConfig()


def test_nested_yaml_overrides(tmp_path):
    p = tmp_path / "planner.yaml"
    p.write_text(
        "planner:\n"
        "  cols: 12\n"
        "  rows: 8\n"
        "  start: [1, 1]\n"
        "  end: '10,6'\n"
        "  min_segment_length: 3\n"
        "  engine: zeta\n"
    )
    cfg = load_planner_config(str(p))
    assert (cfg.cols, cfg.rows) == (12, 8)
    assert cfg.start == (1, 1) and cfg.end == (10, 6)
    assert cfg.min_segment_length == 3 and cfg.engine == "zeta"
    assert cfg.layout is None


def test_flat_yaml_and_bad_values(tmp_path):
    p = tmp_path / "flat.yaml"
    p.write_text("cols: 7\nlayout: 1700000000000\n")
    cfg = load_planner_config(str(p))
    assert cfg.cols == 7 and cfg.layout == "1700000000000"

    p.write_text("cols: many\n")
    with pytest.raises(ValueError, match="cols"):
        load_planner_config(str(p))

    p.write_text("colz: 3\n")
    with pytest.raises(ValueError, match="unknown"):
        load_planner_config(str(p))


def test_keys_beside_planner_section_are_rejected(tmp_path):
    p = tmp_path / "mixed.yaml"
    p.write_text("cols: 9\nplanner:\n  rows: 4\n")
    with pytest.raises(ValueError, match="outside the planner section: cols"):
        load_planner_config(str(p))

    p.write_text("planner: [1, 2]\n")
    with pytest.raises(ValueError, match="mapping"):
        load_planner_config(str(p))


def test_parse_cell_forms():
    assert parse_cell("3,4") == (3, 4)
    assert parse_cell([5, 6]) == (5, 6)
    with pytest.raises(ValueError):
        parse_cell("3;4", "start")


def test_shipped_config_loads():
    cfg = load_planner_config(str(Path(__file__).resolve().parents[1] / "configs" / "planner.yaml"))
    assert cfg == PlannerConfig()
