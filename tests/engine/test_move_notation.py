from __future__ import annotations

import pytest

from loa.engine.move import Move, parse_move
from loa.engine.piece import BLACK, EMPTY, WHITE, Piece
from loa.engine.square import str_to_square


def test_parse_and_serialize() -> None:
    mv = parse_move(" d1-f3\n")
    assert mv == Move(str_to_square("d1"), str_to_square("f3"))
    assert mv.to_text() == "d1-f3"
    assert str(mv) == "d1-f3"


@pytest.mark.parametrize("text", ["", "d1f3", "d1-f", "d1-d1", "a1-b3", "z1-a1"])
def test_parse_rejects_bad_moves(text: str) -> None:
    with pytest.raises(ValueError):
        parse_move(text)


def test_piece_opposite_and_names() -> None:
    assert BLACK.opposite() is WHITE
    assert WHITE.opposite() is BLACK
    with pytest.raises(ValueError):
        EMPTY.opposite()
    assert BLACK.abbrev == "b" and WHITE.abbrev == "w" and EMPTY.abbrev == "-"
    assert WHITE.full_name == "White"


def test_piece_parse() -> None:
    assert Piece.parse("Black") is BLACK
    assert Piece.parse("w") is WHITE
    with pytest.raises(ValueError):
        Piece.parse("red")
