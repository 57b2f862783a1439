import json
import subprocess
import sys
from pathlib import Path

from scripts.evaluation.compare_planners import main as compare_planners
from scripts.run_planner import main as run_planner
from scripts.tools.layouts import main as layouts

ROOT = Path(__file__).resolve().parents[2]


def test_default_config_finds_path(tmp_path):
    out = tmp_path / "path.json"
    rc = run_planner(["--config", str(ROOT / "configs" / "planner.yaml"), "--json-out", str(out)])
    assert rc == 0
    data = json.loads(out.read_text())
    assert data["found"] and data["engine"] == "constrained"
    assert data["path"][0] == [2, 2] and data["path"][-1] == [37, 18]
    assert data["cost"] == len(data["path"]) - 1


def test_no_path_and_invalid_exit_codes(tmp_path):
    out = tmp_path / "path.json"
    args = ["--config", str(tmp_path / "none.yaml"), "--json-out", str(out)]
    assert run_planner(args + ["--cols", "3", "--rows", "3", "--start", "0,0",
                               "--end", "1,1", "--min-segment", "3"]) == 1
    assert json.loads(out.read_text())["found"] is False
    assert run_planner(args + ["--start", "99,0"]) == 2
    assert run_planner(args + ["--min-segment", "0"]) == 2


def test_saved_layout_round_trip(tmp_path):
    store = tmp_path / "layouts.json"
    assert layouts(["--path", str(store), "save", "--rect", "5,0,5,8", "--key", "wall"]) == 0
    out = tmp_path / "path.json"
    rc = run_planner([
        "--config", str(tmp_path / "none.yaml"),
        "--cols", "10", "--rows", "10", "--start", "0,0", "--end", "9,0",
        "--min-segment", "1", "--engine", "zeta",
        "--layout", "wall", "--layouts-path", str(store),
        "--json-out", str(out),
    ])
    assert rc == 0
    data = json.loads(out.read_text())
    assert data["obstacles"] == 9
    assert not {tuple(c) for c in data["path"]} & {(5, y) for y in range(9)}
    assert run_planner(["--config", str(tmp_path / "none.yaml"), "--layout", "missing",
                        "--layouts-path", str(store), "--json-out", str(out)]) == 2
    assert layouts(["--path", str(store), "remove", "wall"]) == 0
    assert layouts(["--path", str(store), "list"]) == 0


def test_compare_planners_smoke(tmp_path):
    md = tmp_path / "compare.md"
    csv = tmp_path / "compare.csv"
    subprocess.run(
        [
            sys.executable,
            "-m",
            "scripts.evaluation.compare_planners",
            "--seeds",
            "2",
            "--cols",
            "12",
            "--rows",
            "8",
            "--out",
            str(md),
            "--csv-out",
            str(csv),
        ],
        check=True,
        cwd=ROOT,
    )
    assert md.exists(), "compare report was not created"
    txt = md.read_text()
    assert "Planner Compare" in txt and "| engine |" in txt
    assert len(csv.read_text().strip().splitlines()) == 1 + 2 * 2


def test_compare_planners_keeps_engine_that_never_finds_a_path(tmp_path):
    md = tmp_path / "compare.md"
    rc = compare_planners([
        "--seeds", "2", "--cols", "12", "--rows", "8", "--density", "0.0",
        "--min-segment", "100",
        "--out", str(md), "--csv-out", str(tmp_path / "compare.csv"),
    ])
    assert rc == 0
    txt = md.read_text()
    # constrained can never turn with a 100-cell minimum; zeta walks unit steps
    assert "| constrained | 2 | 2 |" in txt
    assert "| zeta | 2 | 0 | 18.00 |" in txt
