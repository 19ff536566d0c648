from __future__ import annotations

import pytest

from loa.engine.board import START_POSITION
from loa.engine.game import Game
from loa.engine.move import parse_move
from loa.engine.piece import BLACK, WHITE


def test_new_game_state() -> None:
    g = Game.new()
    assert g.to_position() == START_POSITION
    assert g.turn() is BLACK
    assert len(g.legal_moves()) == 36
    assert g.winner() is None
    assert g.move_history_text() == []


def test_apply_and_undo() -> None:
    g = Game.new()
    g.apply_move(parse_move("b1-b3"))
    assert g.turn() is WHITE
    assert g.move_history_text() == ["b1-b3"]
    assert g.undo_move() == parse_move("b1-b3")
    assert g.to_position() == START_POSITION


def test_apply_illegal_raises() -> None:
    g = Game.new()
    with pytest.raises(ValueError, match="illegal move"):
        g.apply_move(parse_move("a2-c2"))  # White piece, Black to move


def test_undo_without_moves_raises() -> None:
    with pytest.raises(ValueError, match="no moves"):
        Game.new().undo_move()


def test_no_moves_after_game_over() -> None:
    g = Game.from_position("8/8/8/3bb3/3bb3/8/w6w/8 w")
    assert g.game_over()
    with pytest.raises(ValueError, match="game is over"):
        g.apply_move(parse_move("a2-c2"))
