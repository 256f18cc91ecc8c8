"""Puzzle parser: convert raw puzzle records into Puzzle clue lists.

Supports:
- Structured records with "rows" and "columns" (or "cols") clue lists
- Text records whose "puzzle" field uses the .non layout:

    title "Horse"
    width 5
    height 5
    rows
    3
    1,1
    ...
    columns
    1
    ...
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

from .errors import ConfigError
from .model import Clue, Puzzle, normalize_clue

_CLUE_LINE = re.compile(r"^\d+(?:[,\s]+\d+)*$")
_CLUE_SPLIT = re.compile(r"[,\s]+")


def parse_clue(raw: Any) -> Clue:
    """Accept a list of ints or a '1 2' / '1,2' string; '0' and '' are the empty clue."""
    if isinstance(raw, str):
        text = raw.strip()
        if not text or text == "-":
            return ()
        if not _CLUE_LINE.match(text):
            raise ConfigError(f"Malformed clue: {raw!r}")
        return normalize_clue(int(token) for token in _CLUE_SPLIT.split(text))
    if isinstance(raw, int) and not isinstance(raw, bool):
        return normalize_clue([raw])
    if isinstance(raw, (list, tuple)):
        values = []
        for item in raw:
            if isinstance(item, str) and item.strip().isdigit():
                item = int(item)
            values.append(item)
        return normalize_clue(values)
    raise ConfigError(f"Unsupported clue type: {type(raw).__name__}")


def parse_puzzle(puzzle_json: Dict[str, Any]) -> Puzzle:
    puzzle_id = str(puzzle_json.get("id", "unknown") or "unknown")
    title = puzzle_json.get("title")

    rows = puzzle_json.get("rows")
    cols = puzzle_json.get("columns", puzzle_json.get("cols"))
    if rows is not None or cols is not None:
        if rows is None or cols is None:
            raise ConfigError(f"Puzzle {puzzle_id}: needs both rows and columns")
        fields: Dict[str, Any] = {
            "rows": [parse_clue(c) for c in rows],
            "columns": [parse_clue(c) for c in cols],
            "width": puzzle_json.get("width"),
            "height": puzzle_json.get("height"),
        }
    else:
        fields = _parse_non_text(str(puzzle_json.get("puzzle", "") or ""))
        title = title or fields.get("title")

    if not fields.get("rows"):
        raise ConfigError(f"Puzzle {puzzle_id}: no row clues")
    if not fields.get("columns"):
        raise ConfigError(f"Puzzle {puzzle_id}: no column clues")

    _check_dimension(puzzle_id, "height", fields.get("height"), len(fields["rows"]))
    _check_dimension(puzzle_id, "width", fields.get("width"), len(fields["columns"]))

    return Puzzle(
        row_clues=fields["rows"],
        col_clues=fields["columns"],
        puzzle_id=puzzle_id,
        title=title,
    )


def _parse_non_text(text: str) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    block: Optional[str] = None

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            block = None
            continue

        keyword, _, rest = line.partition(" ")
        keyword = keyword.lower()
        if keyword in ("rows", "columns") and not rest.strip():
            block = keyword
            fields[block] = []
            continue
        if block is not None and _CLUE_LINE.match(line):
            fields[block].append(parse_clue(line))
            continue

        block = None
        if keyword in ("width", "height"):
            fields[keyword] = _parse_int(keyword, rest)
        elif keyword == "title":
            fields["title"] = rest.strip().strip('"')
        # Other .non keywords (catalogue, by, copyright, goal, ...) carry no clues.

    return fields


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"Invalid {name}: {raw!r}") from None


def _check_dimension(puzzle_id: str, name: str, declared: Any, actual: int) -> None:
    if declared is None:
        return
    if _parse_int(name, str(declared)) != actual:
        raise ConfigError(
            f"Puzzle {puzzle_id}: declared {name} {declared} but found {actual} clues"
        )

