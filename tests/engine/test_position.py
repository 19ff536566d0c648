from __future__ import annotations

import pytest

from loa.engine.board import Board, START_POSITION
from loa.engine.piece import BLACK, EMPTY, WHITE
from loa.engine.square import str_to_square


def test_initial_layout() -> None:
    b = Board.initial()
    assert b.turn is BLACK
    assert b.piece_count(BLACK) == 12
    assert b.piece_count(WHITE) == 12
    for name in ("b1", "g1", "b8", "g8"):
        assert b.get(str_to_square(name)) is BLACK
    for name in ("a2", "a7", "h2", "h7"):
        assert b.get(str_to_square(name)) is WHITE
    for name in ("a1", "h1", "a8", "h8", "d4"):
        assert b.get(str_to_square(name)) is EMPTY


def test_start_position_round_trip() -> None:
    assert Board.initial().to_position() == START_POSITION
    assert Board.from_position(START_POSITION) == Board.initial()


@pytest.mark.parametrize(
    "text",
    [
        "8/8/5ww1/3b4/8/1w6/1b6/b7 b",
        "2b1bb2/w2b3w/1w2w2w/w2bb3/4w2w/w1b3w1/3b4/1b2b3 w",
    ],
)
def test_round_trip_various_positions(text: str) -> None:
    assert Board.from_position(text).to_position() == text


@pytest.mark.parametrize(
    "text",
    [
        "",  # empty
        "8/8/8/8/8/8/8 b",  # not enough ranks
        "8/8/8/8/8/8/8/8",  # missing side to move
        "8/8/8/8/8/8/8/8 x",  # bad side to move
        "8/8/8/8/8/8/8/7k b",  # bad piece
        "9/8/8/8/8/8/8/8 b",  # too many squares
        "7/8/8/8/8/8/8/8 b",  # too few squares
    ],
)
def test_invalid_positions(text: str) -> None:
    with pytest.raises(ValueError):
        Board.from_position(text)


def test_from_rows_is_bottom_row_first() -> None:
    rows = [[EMPTY] * 8 for _ in range(8)]
    rows[0][0] = BLACK
    rows[7][7] = WHITE
    b = Board.from_rows(rows, WHITE)
    assert b.get(str_to_square("a1")) is BLACK
    assert b.get(str_to_square("h8")) is WHITE
    assert b.turn is WHITE


def test_copy_is_independent() -> None:
    b = Board.initial()
    c = b.copy()
    c.apply_move(c.legal_moves()[0])
    assert b == Board.initial()
    assert b.moves_made() == 0
    assert c.moves_made() == 1

    d = Board.initial()
    d.copy_from(c)
    assert d == c and d.history() == c.history()


def test_render_initial_board() -> None:
    expected = "\n".join(
        ["===", "    - b b b b b b - "]
        + ["    w - - - - - - w "] * 6
        + ["    - b b b b b b - ", "Next move: Black", "==="]
    )
    assert Board.initial().render() == expected
