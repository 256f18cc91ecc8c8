"""Top-level picross solve interface.

Expose `solve_puzzle(puzzle)` that accepts either a parsed Puzzle or a raw
puzzle dictionary compatible with `src.picross.parser.parse_puzzle`.
"""

from typing import Any, Callable, Optional

from src.picross.errors import ContradictionError, DubiousError, UnsolvableError
from src.picross.model import Notification, Puzzle, SolveResult
from src.picross.parser import parse_puzzle
from src.picross.solver_core import PicrossSolver


def solve_puzzle(
    puzzle: Any,
    on_change: Optional[Callable[[Notification], None]] = None,
    max_workers: Optional[int] = None,
) -> SolveResult:
    """
    Solve a puzzle by line logic and report how far it got.
    Accepts:
      - Puzzle instances (used directly)
      - Raw puzzle dictionaries (parsed via `parse_puzzle`)
    Solve failures come back as the result's status; malformed puzzles raise ConfigError.
    """
    if isinstance(puzzle, Puzzle):
        parsed = puzzle
    elif isinstance(puzzle, dict):
        parsed = parse_puzzle(puzzle)
    else:
        raise TypeError("solve_puzzle expects a Puzzle instance or puzzle dictionary")

    solver = PicrossSolver(
        parsed.row_clues,
        parsed.col_clues,
        on_change=on_change,
        max_workers=max_workers,
    )
    error = None
    try:
        solver.solve()
    except (ContradictionError, UnsolvableError, DubiousError) as exc:
        error = str(exc)

    return SolveResult(
        puzzle_id=parsed.puzzle_id,
        status=solver.status,
        grid=solver.get_state(),
        rounds=solver.rounds,
        error=error,
    )


__all__ = ["solve_puzzle"]
