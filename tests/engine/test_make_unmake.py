from __future__ import annotations

import pytest

from loa.engine.board import Board, START_POSITION
from loa.engine.move import parse_move
from loa.engine.piece import BLACK, EMPTY, WHITE
from loa.engine.square import str_to_square


def _snapshot(b: Board):
    return (
        b.to_position(),
        b.turn,
        b.history(),
        b.region_sizes(BLACK),
        b.region_sizes(WHITE),
        b.winner(),
    )


def test_apply_then_undo_restores_position() -> None:
    b = Board.initial()
    before = _snapshot(b)
    b.apply_move(parse_move("b1-b3"))
    assert b.turn is WHITE
    assert b.get(str_to_square("b1")) is EMPTY
    assert b.get(str_to_square("b3")) is BLACK
    assert b.moves_made() == 1

    undone = b.undo_last_move()
    assert undone == parse_move("b1-b3")
    assert _snapshot(b) == before
    assert b.to_position() == START_POSITION


def test_undo_restores_captured_piece() -> None:
    b = Board.initial()
    counts = (b.piece_count(BLACK), b.piece_count(WHITE))
    b.apply_move(parse_move("c1-a3"))
    assert b.get(str_to_square("a3")) is BLACK
    assert b.piece_count(WHITE) == 11
    assert b.piece_count(BLACK) == 12
    b.undo_last_move()
    assert b.get(str_to_square("a3")) is WHITE
    assert b.get(str_to_square("c1")) is BLACK
    assert (b.piece_count(BLACK), b.piece_count(WHITE)) == counts


def test_every_initial_move_round_trips() -> None:
    b = Board.initial()
    before = _snapshot(b)
    for m in b.legal_moves():
        b.apply_move(m)
        b.undo_last_move()
        assert _snapshot(b) == before


def test_sequence_undo_in_reverse() -> None:
    b = Board.initial()
    positions = [b.to_position()]
    for _ in range(6):
        b.apply_move(b.legal_moves()[0])
        positions.append(b.to_position())
    for expected in reversed(positions[:-1]):
        b.undo_last_move()
        assert b.to_position() == expected
    assert b.moves_made() == 0


def test_piece_counts_never_grow() -> None:
    b = Board.initial()
    for _ in range(10):
        if b.game_over():
            break
        black, white = b.piece_count(BLACK), b.piece_count(WHITE)
        mover = b.turn
        b.apply_move(b.legal_moves()[-1])
        assert b.piece_count(mover) == (black if mover is BLACK else white)
        assert b.piece_count(BLACK) <= black and b.piece_count(WHITE) <= white


def test_apply_illegal_move_raises() -> None:
    b = Board.initial()
    with pytest.raises(ValueError, match="illegal move"):
        b.apply_move(parse_move("b1-b4"))
    assert b.moves_made() == 0


def test_undo_on_empty_history_raises() -> None:
    b = Board.initial()
    with pytest.raises(ValueError, match="no moves to undo"):
        b.undo_last_move()


def test_apply_invalidates_region_cache() -> None:
    b = Board.from_position("8/8/8/8/8/8/8/b2wb3 b")
    assert b.region_sizes(BLACK) == [1, 1]
    assert b.region_sizes(WHITE) == [1]
    # a1 captures d1: rank 1 holds three pieces
    b.apply_move(parse_move("a1-d1"))
    assert b.region_sizes(BLACK) == [2]
    assert b.region_sizes(WHITE) == []
    b.undo_last_move()
    assert b.region_sizes(BLACK) == [1, 1]
    b.set(str_to_square("b1"), BLACK)
    assert b.region_sizes(BLACK) == [2, 1]
    assert b.region_sizes(WHITE) == [1]
