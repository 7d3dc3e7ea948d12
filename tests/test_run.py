import csv
import json

import pytest

from conftest import GRID_01, SOLVED, UNSOLVABLE
from run import main, parse_args, trace_path, write_results_csv
from src.utils.trace import Tracer


def test_main_single_file(grid_01_text, capsys):
    total = main([str(grid_01_text)])

    out = capsys.readouterr().out
    assert total == 483
    assert "1: " in out
    assert "Answer: 483" in out
    assert "Runtime:" in out


def test_main_directory_input(tmp_path, capsys):
    (tmp_path / "a.jsonl").write_text(json.dumps({"id": "a", "puzzle": GRID_01}) + "\n")
    (tmp_path / "b.jsonl").write_text(json.dumps({"id": "b", "puzzle": SOLVED}) + "\n")
    (tmp_path / "notes.md").write_text("ignored")

    assert main([str(tmp_path), "--quiet"]) == 483 + 534
    out = capsys.readouterr().out
    assert " ms\n" not in out.split("Answer")[0]


def test_main_reports_unsolvable(tmp_path, capsys):
    path = tmp_path / "p.jsonl"
    path.write_text(json.dumps({"id": "dead-end", "puzzle": UNSOLVABLE}) + "\n")

    assert main([str(path)]) == 0
    assert "dead-end: no solution" in capsys.readouterr().out


def test_main_limit(tmp_path):
    path = tmp_path / "flat.txt"
    path.write_text(f"{SOLVED}\n{GRID_01}\n")
    assert main([str(path), "--limit", "1", "--quiet"]) == 534


def test_main_progress_bar(grid_01_text):
    assert main([str(grid_01_text), "--progress"]) == 483


def test_csv_output(tmp_path, grid_01_text):
    output_path = tmp_path / "results.csv"
    main([str(grid_01_text), "--output", str(output_path), "--quiet"])

    with open(output_path, newline="") as f:
        rows = list(csv.DictReader(f))
    assert rows[0]["id"] == "Grid 01"
    assert rows[0]["solved"] == "True"
    assert rows[0]["leading"] == "483"
    assert int(rows[0]["placements"]) > 0


def test_trace_dir(tmp_path, grid_01_text):
    trace_dir = tmp_path / "traces"
    main([str(grid_01_text), "--trace-dir", str(trace_dir), "--quiet"])

    content = (trace_dir / "Grid_01.csv").read_text()
    assert content.startswith("timestamp,step_number,action_type,cell")
    assert "solution_found" in content


def test_input_defaults_to_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("SUDOKU_DATA_PATH", str(tmp_path / "batch.txt"))
    args = parse_args([])
    assert args.input == tmp_path / "batch.txt"


def test_write_results_csv(tmp_path):
    output_path = tmp_path / "out.csv"
    write_results_csv(
        [{
            "id": "x",
            "solved": False,
            "grid": "",
            "leading": 0,
            "placements": -1,
            "backtracks": -1,
            "elapsed_ms": 0.0,
        }],
        output_path,
    )
    content = output_path.read_text()
    assert "id,solved,grid,leading,placements,backtracks,elapsed_ms" in content
    assert "x,False,,0,-1,-1,0.000" in content


def test_trace_file_stays_inside_trace_dir(tmp_path):
    path = tmp_path / "p.jsonl"
    path.write_text(
        json.dumps({"id": "set/1", "puzzle": SOLVED}) + "\n"
        + json.dumps({"id": "../escape", "puzzle": SOLVED}) + "\n"
    )
    trace_dir = tmp_path / "traces"
    main([str(path), "--trace-dir", str(trace_dir), "--quiet"])

    assert sorted(p.name for p in trace_dir.iterdir()) == ["_escape.csv", "set_1.csv"]
    assert not (trace_dir / "set").exists()
    assert not (tmp_path / "escape.csv").exists()


def test_trace_path_sanitizes_ids(tmp_path):
    assert trace_path(tmp_path, "Grid 01") == tmp_path / "Grid_01.csv"
    assert trace_path(tmp_path, "a/b\\c") == tmp_path / "a_b_c.csv"
    assert trace_path(tmp_path, "..") == tmp_path / "puzzle.csv"


def test_negative_limit_rejected(grid_01_text):
    with pytest.raises(SystemExit):
        parse_args([str(grid_01_text), "--limit", "-1"])


def test_zero_limit_solves_nothing(grid_01_text, capsys):
    assert main([str(grid_01_text), "--limit", "0"]) == 0
    assert "Answer: 0" in capsys.readouterr().out


def test_total_goes_through_puzzle_sum(monkeypatch, grid_01_text):
    seen = []

    def _sum(solutions):
        seen.extend(solutions)
        return 7

    monkeypatch.setattr("run.puzzle_sum", _sum)
    assert main([str(grid_01_text), "--quiet"]) == 7
    assert [s.leading_number() for s in seen] == [483]


def test_tracing_only_when_steps_are_reported(monkeypatch, tmp_path, grid_01_text):
    flags = []

    def _tracer(enabled=True):
        flags.append(enabled)
        return Tracer(enabled=enabled)

    monkeypatch.setattr("run.Tracer", _tracer)
    main([str(grid_01_text), "--quiet"])
    main([str(grid_01_text), "--quiet", "--output", str(tmp_path / "r.csv")])
    main([str(grid_01_text), "--quiet", "--trace-dir", str(tmp_path / "t")])
    assert flags == [False, True, True]
