import pytest

from src.picross.errors import ConfigError
from src.picross.parser import parse_clue, parse_puzzle

HORSE_TEXT = """catalogue "sample"
title "Horse"
by "somebody"
width 5
height 5

rows
3
1,1
4
3
1 1

columns
1
5
1,2
3
2

goal 1110001001011110111001010
"""


def test_parse_clue_forms():
    assert parse_clue("1 2") == (1, 2)
    assert parse_clue("1,2") == (1, 2)
    assert parse_clue(" 3 ") == (3,)
    assert parse_clue("0") == ()
    assert parse_clue("") == ()
    assert parse_clue([2, "1"]) == (2, 1)
    assert parse_clue(4) == (4,)
    assert parse_clue([0]) == ()


@pytest.mark.parametrize("raw", ["1 x", [1, -2], [1, 0], 2.5, [True]])
def test_parse_clue_rejects_bad_input(raw):
    with pytest.raises(ConfigError):
        parse_clue(raw)


def test_parse_non_text():
    puzzle = parse_puzzle({"id": "horse", "puzzle": HORSE_TEXT})
    assert puzzle.puzzle_id == "horse"
    assert puzzle.title == "Horse"
    assert puzzle.row_clues == [(3,), (1, 1), (4,), (3,), (1, 1)]
    assert puzzle.col_clues == [(1,), (5,), (1, 2), (3,), (2,)]
    assert (puzzle.height, puzzle.width) == (5, 5)


def test_parse_structured_record():
    puzzle = parse_puzzle({"id": "p", "rows": [[1], "0"], "cols": ["1"], "width": 1})
    assert puzzle.row_clues == [(1,), ()]
    assert puzzle.col_clues == [(1,)]


def test_parse_rejects_dimension_mismatch():
    text = HORSE_TEXT.replace("width 5", "width 6")
    with pytest.raises(ConfigError):
        parse_puzzle({"id": "bad", "puzzle": text})


def test_parse_rejects_missing_columns():
    with pytest.raises(ConfigError):
        parse_puzzle({"id": "half", "rows": [[1]]})
    with pytest.raises(ConfigError):
        parse_puzzle({"id": "text", "puzzle": "rows\n1\n"})


def test_parse_rejects_bad_dimension_value():
    with pytest.raises(ConfigError):
        parse_puzzle({"puzzle": "width five\nrows\n1\n\ncolumns\n1\n"})


@pytest.mark.parametrize("width", ["five", "2.5", [2]])
def test_parse_rejects_bad_declared_dimension_in_record(width):
    record = {"id": "bad", "width": width, "rows": [[2], [2]], "columns": [[2], [2]]}
    with pytest.raises(ConfigError, match="width"):
        parse_puzzle(record)


def test_parse_accepts_declared_dimension_as_string():
    puzzle = parse_puzzle({"id": "p", "height": "2", "rows": [[2], [2]], "columns": [[2], [2]]})
    assert puzzle.height == 2
