"""Line-logic picross solver: per-line workers, per-axis fan-out, grid convergence loop."""

import queue
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Sequence, Tuple

from .combinatorics import Filling, enumerate_fillings
from .errors import ConfigError, ContradictionError, DubiousError, UnsolvableError
from .model import (
    CellState,
    GridHint,
    LineHint,
    Notification,
    SolveStatus,
    min_line_length,
    normalize_clue,
)
from src.utils.trace import Tracer, get_tracer

LineEvent = Tuple[int, bool]
AxisEvent = Tuple[int, int, bool]

_FAILURE_STATUS = {
    ContradictionError: SolveStatus.CONTRADICTION,
    UnsolvableError: SolveStatus.UNSOLVABLE,
    DubiousError: SolveStatus.DUBIOUS,
}


def transpose(matrix: Sequence[Sequence[CellState]]) -> GridHint:
    return [list(column) for column in zip(*matrix)]


def count_unknown(matrix: Sequence[Sequence[CellState]]) -> int:
    return sum(1 for line in matrix for cell in line if cell is CellState.UNKNOWN)


def _render_line(line: Sequence[CellState]) -> str:
    return "".join(str(cell) for cell in line)


def _drain(buffer: Optional[queue.Queue]) -> list:
    """Take everything currently buffered without blocking."""
    events = []
    if buffer is None:
        return events
    while True:
        try:
            events.append(buffer.get_nowait())
        except queue.Empty:
            return events


class LineWorker:
    """
    Owns the clue and the tri-state hint of one row or column.

    Each call to `narrow` folds in what the other axis learned, then keeps the
    cells on which every still-possible filling agrees.
    """

    def __init__(self, length: int, clue: Sequence[int], notify: bool = False):
        if length < 1:
            raise ConfigError("LineWorker: zero-length line")
        self.length = length
        self.clue = normalize_clue(clue)
        self._hint: LineHint = [CellState.UNKNOWN] * length
        self._primed = False
        # Every cell leaves UNKNOWN at most once, so `length` slots never fill up.
        self._events: Optional[queue.Queue] = queue.Queue(maxsize=length) if notify else None

    @property
    def hint(self) -> LineHint:
        return self._hint

    def narrow(self, incoming: Sequence[CellState]) -> int:
        """
        Merge `incoming` into the stored hint and narrow it against the clue.
        Returns how many cells this call moved out of UNKNOWN.
        """
        if len(incoming) != self.length:
            raise ValueError(
                f"LineWorker: hint length {len(incoming)} does not match line length {self.length}"
            )
        for idx, (new, old) in enumerate(zip(incoming, self._hint)):
            if new.is_decided and old.is_decided and new is not old:
                raise ContradictionError(
                    f"cell {idx + 1} is already {old.name}, incoming hint says {new.name}"
                )

        decided: List[int] = []
        for idx, new in enumerate(incoming):
            if new.is_decided and not self._hint[idx].is_decided:
                self._hint[idx] = new
                decided.append(idx)

        if not decided and self._primed:
            return 0
        self._primed = True

        pivot, settled = self._intersect()
        for idx in settled:
            self._hint[idx] = CellState.from_bool(pivot[idx])
            decided.append(idx)

        if self._events is not None:
            for idx in sorted(decided):
                self._events.put_nowait((idx, self._hint[idx] is CellState.FILL))
        return len(decided)

    def drain(self) -> List[LineEvent]:
        return _drain(self._events)

    def _intersect(self) -> Tuple[Filling, List[int]]:
        """
        Take the first admissible filling as the pivot and return it with the
        unknown cells no other admissible filling disagrees on.
        """
        fills = [idx for idx, state in enumerate(self._hint) if state is CellState.FILL]
        gaps = [idx for idx, state in enumerate(self._hint) if state is CellState.GAP]
        pivot: Optional[Filling] = None
        settled: List[int] = []
        for filling in enumerate_fillings(self.length, self.clue):
            if not all(filling[idx] for idx in fills) or any(filling[idx] for idx in gaps):
                continue
            if pivot is None:
                pivot = filling
                settled = [idx for idx, state in enumerate(self._hint) if not state.is_decided]
                continue
            if settled:
                # Any disagreement makes the cell ambiguous for the rest of the scan.
                settled = [idx for idx in settled if filling[idx] == pivot[idx]]
        if pivot is None:
            needed = min_line_length(self.clue)
            if needed > self.length:
                raise UnsolvableError(
                    f"clue {list(self.clue)} needs {needed} cells, line has {self.length}"
                )
            raise UnsolvableError(
                f"no filling of clue {list(self.clue)} fits line {_render_line(self._hint)}"
            )
        return pivot, settled


class Axis:
    """All line workers of one axis; narrows every line concurrently each round."""

    def __init__(
        self,
        depth: int,
        clues: Sequence[Sequence[int]],
        name: str = "row",
        notify: bool = False,
        max_workers: Optional[int] = None,
        tracer: Optional[Tracer] = None,
    ):
        if not clues:
            raise ConfigError(f"Axis {name}: empty clue list")
        self.name = name
        self.depth = depth
        self.max_workers = max_workers
        self.tracer = tracer
        self.workers = [LineWorker(depth, clue, notify=notify) for clue in clues]
        self._events: Optional[queue.Queue] = (
            queue.Queue(maxsize=len(self.workers) * depth) if notify else None
        )

    def __len__(self) -> int:
        return len(self.workers)

    def get_hint(self) -> GridHint:
        return [worker.hint for worker in self.workers]

    def work(self, hint_matrix: Sequence[Sequence[CellState]]) -> int:
        """
        Narrow every line against its row of `hint_matrix` and wait for all of them.
        Raises the first failure in line order once every worker has finished.
        Returns the number of cells decided across the axis.
        """
        if len(hint_matrix) != len(self.workers):
            raise ValueError(
                f"Axis {self.name}: got {len(hint_matrix)} lines, expected {len(self.workers)}"
            )
        tracer = self.tracer or get_tracer()

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                executor.submit(worker.narrow, hint_matrix[line])
                for line, worker in enumerate(self.workers)
            ]
            wait(futures)

        for line, future in enumerate(futures):
            error = future.exception()
            if error is not None:
                tracer.log_failure(
                    type(error).__name__, f"{self.name} {line + 1}: {error}"
                )
                raise error

        total = 0
        for line, (worker, future) in enumerate(zip(self.workers, futures)):
            decided = future.result()
            if decided:
                tracer.log_line_narrowed(self.name, line, decided)
                total += decided
            for cell, is_fill in worker.drain():
                self._events.put_nowait((line, cell, is_fill))
        return total

    def drain(self) -> List[AxisEvent]:
        return _drain(self._events)


class PicrossSolver:
    """
    Alternates column and row rounds until every cell is decided.

    `on_change`, when given, receives one Notification per cell that leaves
    UNKNOWN, in 1-based (row, col) coordinates.
    """

    def __init__(
        self,
        row_clues: Sequence[Sequence[int]],
        col_clues: Sequence[Sequence[int]],
        on_change: Optional[Callable[[Notification], None]] = None,
        max_workers: Optional[int] = None,
        tracer: Optional[Tracer] = None,
    ):
        if not row_clues or not col_clues:
            raise ConfigError("PicrossSolver: row and column clues must both be non-empty")
        self.on_change = on_change
        self.tracer = tracer
        self.row = Axis(
            len(col_clues), row_clues, name="row",
            notify=on_change is not None, max_workers=max_workers, tracer=tracer,
        )
        self.col = Axis(
            len(row_clues), col_clues, name="col",
            max_workers=max_workers, tracer=tracer,
        )
        self.status = SolveStatus.RUNNING
        self.rounds = 0

    def get_state(self) -> GridHint:
        return [list(line) for line in self.row.get_hint()]

    def solve(self) -> None:
        """Run rounds to convergence; raises ContradictionError, UnsolvableError or DubiousError."""
        tracer = self.tracer or get_tracer()
        self.status = SolveStatus.RUNNING
        try:
            self._converge(tracer)
            # Reconcile the column hints with the final row hints.
            self.col.work(transpose(self.row.get_hint()))
        except (ContradictionError, UnsolvableError, DubiousError) as exc:
            self.status = _FAILURE_STATUS[type(exc)]
            raise
        self.status = SolveStatus.CONVERGED
        tracer.log_solution_found(self.rounds)

    def _converge(self, tracer: Tracer) -> None:
        unknown = count_unknown(self.row.get_hint())
        while unknown > 0:
            self.col.work(transpose(self.row.get_hint()))
            self.row.work(transpose(self.col.get_hint()))
            self._forward_notifications()
            self.rounds += 1

            remaining = count_unknown(self.row.get_hint())
            tracer.log_round(self.rounds, unknown, remaining)
            if remaining == unknown:
                reason = f"no progress in round {self.rounds}, {remaining} cells undecided"
                tracer.log_failure("DubiousError", reason, self.rounds, remaining)
                raise DubiousError(reason)
            unknown = remaining

    def _forward_notifications(self) -> None:
        if self.on_change is None:
            return
        for row, col, is_fill in self.row.drain():
            self.on_change(Notification(row + 1, col + 1, is_fill))
