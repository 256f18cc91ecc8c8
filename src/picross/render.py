"""Text rendering of grid hints: '#' fill, '.' gap, '?' unknown."""

from typing import Sequence

from .model import CellState, GridHint

_FROM_SYMBOL = {str(state): state for state in CellState}


def render_grid(grid: Sequence[Sequence[CellState]]) -> str:
    return "\n".join("".join(str(cell) for cell in row) for row in grid)


def grid_from_text(text: str) -> GridHint:
    """Inverse of `render_grid`; blanks inside and around rows are ignored."""
    grid = []
    for raw_line in text.strip().splitlines():
        line = "".join(raw_line.split())
        if not line:
            continue
        try:
            grid.append([_FROM_SYMBOL[symbol] for symbol in line])
        except KeyError as exc:
            raise ValueError(f"Unknown grid symbol {exc.args[0]!r}") from exc
    return grid
