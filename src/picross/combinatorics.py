"""Line enumeration: every filling of a single picross line that honors a clue.

A line holding k runs is modelled as k + 1 gap segments around the runs. The
outer segments may be empty, the interior ones hold at least one cell, and the
segment lengths add up to the line length minus the filled cells. Enumerating
those gap layouts in a fixed order enumerates the fillings.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

Layout = Tuple[int, ...]
Filling = Tuple[bool, ...]


class GapLayouts:
    """
    Iterate every gap-segment vector of `count` segments summing to `slack`.

    Order is lexicographic. The first vector pushes all spare cells onto the
    last segment; each successor finds the rightmost segment above its
    minimum, moves one unit from it to its left neighbour, and resets every
    segment right of that neighbour back to its minimum (remainder on the
    last segment).
    """

    def __init__(self, slack: int, count: int):
        if count < 1:
            raise ValueError("GapLayouts needs at least one segment")
        self.slack = slack
        self.count = count
        if count == 1:
            self.minimums: List[int] = [0]
        else:
            self.minimums = [0] + [1] * (count - 2) + [0]
        self._current: Optional[List[int]] = None
        self._exhausted = slack < sum(self.minimums)

    def __iter__(self) -> Iterator[Layout]:
        return self

    def __next__(self) -> Layout:
        if self._exhausted:
            raise StopIteration
        if self._current is None:
            self._current = list(self.minimums)
            self._current[-1] += self.slack - sum(self.minimums)
            return tuple(self._current)
        if not self._advance():
            self._exhausted = True
            raise StopIteration
        return tuple(self._current)

    def _advance(self) -> bool:
        layout = self._current
        for donor in range(self.count - 1, 0, -1):
            if layout[donor] <= self.minimums[donor]:
                continue
            layout[donor - 1] += 1
            for idx in range(donor, self.count):
                layout[idx] = self.minimums[idx]
            layout[-1] += self.slack - sum(layout)
            return True
        return False


def layout_to_filling(layout: Sequence[int], clue: Sequence[int]) -> Filling:
    """Interleave gap segments with the clue's runs into a per-cell bitmap."""
    cells: List[bool] = []
    for idx, gap in enumerate(layout):
        cells.extend([False] * gap)
        if idx < len(clue):
            cells.extend([True] * clue[idx])
    return tuple(cells)


class LineFillings:
    """Fresh, independent iterator over the fillings of one line."""

    def __init__(self, length: int, clue: Sequence[int]):
        self.length = length
        self.clue = tuple(clue)
        self._layouts = GapLayouts(length - sum(self.clue), len(self.clue) + 1)

    def __iter__(self) -> Iterator[Filling]:
        return self

    def __next__(self) -> Filling:
        return layout_to_filling(next(self._layouts), self.clue)


def enumerate_fillings(length: int, clue: Sequence[int]) -> LineFillings:
    """
    Return every filling of a `length`-cell line honoring `clue`.
    Empty clue yields one all-gap filling; an oversized clue yields nothing.
    """
    return LineFillings(length, clue)
