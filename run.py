"""CLI entrypoint: load puzzle(s), run the line-logic solver, and report results."""

import argparse
import csv
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from solver import solve_puzzle
from src.picross.errors import ConfigError
from src.picross.loader import PUZZLE_SUFFIXES, load_puzzles
from src.picross.model import SolveResult
from src.picross.render import render_grid
from src.utils.io import save_json
from src.utils.trace import get_tracer, reset_tracer

WORKERS_ENV = "PICROSS_MAX_WORKERS"


def _default_workers() -> Optional[int]:
    raw = os.environ.get(WORKERS_ENV, "").strip()
    if not raw:
        return None
    try:
        workers = int(raw)
    except ValueError:
        print(f"WARNING: ignoring {WORKERS_ENV}={raw!r}, expected an integer")
        return None
    return workers if workers > 0 else None


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def parse_args():
    parser = argparse.ArgumentParser(description="Solve picross puzzles by row/column line logic")
    parser.add_argument("input", type=Path, help="Path to a puzzle file or a directory of puzzles")
    parser.add_argument("--output", type=Path, default=None, help="Optional .csv or .json report path")
    parser.add_argument(
        "--trace-dir",
        type=Path,
        default=None,
        help="Optional directory receiving one solver trace CSV per puzzle.",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=_default_workers(),
        help=f"Thread pool size per axis round (default: ${WORKERS_ENV} or the executor default).",
    )
    parser.add_argument("--show", action="store_true", help="Print each rendered grid.")
    return parser.parse_args()


def format_solution(result: SolveResult) -> Dict[str, Any]:
    return {
        "id": result.puzzle_id,
        "status": result.status.value,
        "grid": render_grid(result.grid).splitlines(),
        "rounds": result.rounds,
        "error": result.error,
    }


def write_results_csv(results: List[Dict[str, Any]], output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "status", "grid", "rounds", "steps", "error"])

        for r in results:
            writer.writerow([
                r["id"],
                r["status"],
                json.dumps(r["grid"], ensure_ascii=False, separators=(",", ":")),
                r["rounds"],
                r.get("steps", -1),
                r.get("error") or "",
            ])


def collect_puzzles(input_path: Path) -> List[Dict[str, Any]]:
    if input_path.is_file():
        return load_puzzles(str(input_path))
    if input_path.is_dir():
        puzzles = []
        for file_path in sorted(input_path.iterdir()):
            if file_path.suffix.lower() in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
        return puzzles
    raise ValueError(f"Input path {input_path} is neither file nor directory")


def main():
    args = parse_args()
    puzzles = collect_puzzles(args.input)
    results = []

    for puzzle in tqdm(puzzles, desc="Solving", unit="puzzle"):
        reset_tracer()
        tracer = get_tracer()
        puzzle_id = str(puzzle.get("id", "unknown"))

        try:
            result = solve_puzzle(puzzle, max_workers=args.workers)
        except ConfigError as e:
            print(f"ERROR: Failed to read puzzle {puzzle_id}: {e}")
            results.append({
                "id": puzzle_id,
                "status": "invalid",
                "grid": [],
                "rounds": 0,
                "steps": -1,
                "error": str(e),
            })
            continue

        row = format_solution(result)
        # Steps counts every traced action, line narrowing included.
        row["steps"] = tracer.summary()["total_steps"]
        results.append(row)

        if args.show:
            print(f"\n{puzzle_id} [{result.status.value}]")
            print(render_grid(result.grid))
        if args.trace_dir:
            tracer.to_csv(args.trace_dir / f"{puzzle_id}.csv")

    if args.output:
        if args.output.suffix.lower() == ".json":
            save_json(args.output, results)
        else:
            write_results_csv(results, args.output)
    else:
        counts: Dict[str, int] = {}
        for r in results:
            counts[r["status"]] = counts.get(r["status"], 0) + 1
        print(f"Solved {len(results)} puzzle(s): {counts}")


if __name__ == "__main__":
    main()
