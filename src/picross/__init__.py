"""Picross line enumeration, line-logic solver, and puzzle parsing."""

from .errors import (
    ConfigError,
    ContradictionError,
    DubiousError,
    PicrossError,
    UnsolvableError,
)
from .model import CellState, Notification, Puzzle, SolveResult, SolveStatus
from .combinatorics import enumerate_fillings
from .solver_core import Axis, LineWorker, PicrossSolver
from .parser import parse_clue, parse_puzzle
from .render import grid_from_text, render_grid

__all__ = [
    "CellState",
    "Notification",
    "Puzzle",
    "SolveResult",
    "SolveStatus",
    "PicrossError",
    "ConfigError",
    "ContradictionError",
    "UnsolvableError",
    "DubiousError",
    "enumerate_fillings",
    "LineWorker",
    "Axis",
    "PicrossSolver",
    "parse_clue",
    "parse_puzzle",
    "render_grid",
    "grid_from_text",
]
