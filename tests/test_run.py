import csv
import json
import sys

import pytest

from run import collect_puzzles, format_solution, main, write_results_csv
from src.picross.model import CellState, SolveResult, SolveStatus

X, G = CellState.FILL, CellState.GAP


def _write_puzzles(tmp_path):
    (tmp_path / "square.json").write_text(json.dumps(
        {"id": "square", "rows": [[2], [2]], "columns": [[2], [2]]}
    ))
    (tmp_path / "checker.jsonl").write_text(json.dumps(
        {"id": "checker", "rows": [[1], [1]], "columns": [[1], [1]]}
    ) + "\n")
    (tmp_path / "broken.json").write_text(json.dumps(
        {"id": "broken", "rows": [[1, "x"]], "columns": [[1]]}
    ))
    (tmp_path / "notes.md").write_text("ignored")


def test_format_solution_solved():
    result = SolveResult("p", SolveStatus.CONVERGED, [[X, G], [G, X]], rounds=1)
    row = format_solution(result)
    assert row == {
        "id": "p",
        "status": "converged",
        "grid": ["#.", ".#"],
        "rounds": 1,
        "error": None,
    }


def test_write_results_csv(tmp_path):
    output = tmp_path / "out.csv"
    write_results_csv(
        [
            {"id": "p", "status": "converged", "grid": ["##"], "rounds": 2, "steps": 7, "error": None},
            {"id": "q", "status": "invalid", "grid": [], "rounds": 0, "steps": -1, "error": "bad clue"},
        ],
        output,
    )
    lines = output.read_text().splitlines()
    assert lines[0] == "id,status,grid,rounds,steps,error"
    assert lines[1] == 'p,converged,"[""##""]",2,7,'
    assert lines[2] == "q,invalid,[],0,-1,bad clue"


def test_collect_puzzles_filters_directory(tmp_path):
    _write_puzzles(tmp_path)
    ids = [p["id"] for p in collect_puzzles(tmp_path)]
    assert ids == ["broken", "checker", "square"]


def test_collect_puzzles_rejects_missing_path(tmp_path):
    with pytest.raises(ValueError):
        collect_puzzles(tmp_path / "missing")


def test_main_directory_to_json(tmp_path, monkeypatch):
    _write_puzzles(tmp_path)
    output = tmp_path / "report" / "results.json"
    monkeypatch.setattr(sys, "argv", ["run.py", str(tmp_path), "--output", str(output)])

    main()

    results = {r["id"]: r for r in json.loads(output.read_text())}
    assert results["square"]["status"] == "converged"
    assert results["square"]["grid"] == ["##", "##"]
    assert results["checker"]["status"] == "dubious"
    assert results["checker"]["grid"] == ["??", "??"]
    assert results["broken"]["status"] == "invalid"
    assert results["square"]["steps"] > 0


def test_main_single_file_csv_and_traces(tmp_path, monkeypatch, capsys):
    _write_puzzles(tmp_path)
    output = tmp_path / "results.csv"
    trace_dir = tmp_path / "traces"
    monkeypatch.setattr(sys, "argv", [
        "run.py", str(tmp_path / "square.json"),
        "--output", str(output),
        "--trace-dir", str(trace_dir),
        "--workers", "2",
        "--show",
    ])

    main()

    assert "square,converged" in output.read_text()
    assert (trace_dir / "square.csv").exists()
    assert "##\n##" in capsys.readouterr().out


def test_workers_default_from_environment(tmp_path, monkeypatch):
    import run

    monkeypatch.setenv(run.WORKERS_ENV, "3")
    assert run._default_workers() == 3
    monkeypatch.setenv(run.WORKERS_ENV, "lots")
    assert run._default_workers() is None
    monkeypatch.delenv(run.WORKERS_ENV)
    assert run._default_workers() is None


def test_main_records_bad_dimensions_and_keeps_going(tmp_path, monkeypatch):
    (tmp_path / "a_bad.json").write_text(json.dumps(
        {"id": "bad", "width": "five", "rows": [[2], [2]], "columns": [[2], [2]]}
    ))
    (tmp_path / "b_good.json").write_text(json.dumps(
        {"id": "good", "rows": [[2], [2]], "columns": [[2], [2]]}
    ))
    output = tmp_path / "results.csv"
    monkeypatch.setattr(sys, "argv", ["run.py", str(tmp_path), "--output", str(output)])

    main()

    with open(output, newline="", encoding="utf-8") as f:
        rows = {r["id"]: r for r in csv.DictReader(f)}
    assert rows["bad"]["status"] == "invalid"
    assert rows["bad"]["steps"] == "-1"
    assert "width" in rows["bad"]["error"]
    assert rows["good"]["status"] == "converged"
    assert int(rows["good"]["steps"]) > 0
    assert rows["good"]["error"] == ""


@pytest.mark.parametrize("workers", ["0", "-2", "many"])
def test_workers_flag_rejects_non_positive_values(tmp_path, monkeypatch, capsys, workers):
    _write_puzzles(tmp_path)
    monkeypatch.setattr(sys, "argv", ["run.py", str(tmp_path), "--workers", workers])

    with pytest.raises(SystemExit) as exc:
        main()

    assert exc.value.code == 2
    assert "--workers" in capsys.readouterr().err
