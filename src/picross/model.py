"""Picross core data structures and clue helpers."""

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from .errors import ConfigError

Clue = Tuple[int, ...]
LineHint = List["CellState"]
GridHint = List[List["CellState"]]


class CellState(enum.Enum):
    UNKNOWN = 0
    GAP = 1
    FILL = 2

    @property
    def is_decided(self) -> bool:
        return self is not CellState.UNKNOWN

    @classmethod
    def from_bool(cls, filled: bool) -> "CellState":
        return cls.FILL if filled else cls.GAP

    def __str__(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    CellState.UNKNOWN: "?",
    CellState.GAP: ".",
    CellState.FILL: "#",
}


class SolveStatus(enum.Enum):
    RUNNING = "running"
    CONVERGED = "converged"
    CONTRADICTION = "contradiction"
    UNSOLVABLE = "unsolvable"
    DUBIOUS = "dubious"


class Notification(NamedTuple):
    """A single cell leaving the unknown state, in 1-based grid coordinates."""

    row: int
    col: int
    is_fill: bool


def normalize_clue(raw: Iterable[Any]) -> Clue:
    """
    Validate a clue and return it as a tuple of positive ints.
    A lone zero is the conventional spelling of an empty line and maps to ().
    """
    values = list(raw)
    if values == [0]:
        return ()
    clue = []
    for value in values:
        # bool is an int subclass; reject it explicitly.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"Clue entries must be integers, got {value!r}")
        if value < 1:
            raise ConfigError(f"Clue entries must be positive, got {value}")
        clue.append(value)
    return tuple(clue)


def min_line_length(clue: Sequence[int]) -> int:
    """Smallest line that can hold `clue`: the runs plus one gap between each pair."""
    return sum(clue) + max(0, len(clue) - 1)


def run_lengths(filling: Sequence[bool]) -> Clue:
    """Run-length encode the filled cells of a line."""
    runs = []
    current = 0
    for cell in filling:
        if cell:
            current += 1
        elif current:
            runs.append(current)
            current = 0
    if current:
        runs.append(current)
    return tuple(runs)


@dataclass
class Puzzle:
    row_clues: List[Clue]
    col_clues: List[Clue]
    puzzle_id: str = "unknown"
    title: Optional[str] = None

    def __post_init__(self) -> None:
        self.row_clues = [normalize_clue(c) for c in self.row_clues]
        self.col_clues = [normalize_clue(c) for c in self.col_clues]
        if not self.row_clues or not self.col_clues:
            raise ConfigError("A puzzle needs at least one row clue and one column clue")

    @property
    def height(self) -> int:
        return len(self.row_clues)

    @property
    def width(self) -> int:
        return len(self.col_clues)


@dataclass
class SolveResult:
    puzzle_id: str
    status: SolveStatus
    grid: GridHint = field(default_factory=list)
    rounds: int = 0
    error: Optional[str] = None

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.CONVERGED
