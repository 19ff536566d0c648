from __future__ import annotations

import pytest

from loa.engine import regions
from loa.engine.board import Board
from loa.engine.piece import BLACK, WHITE


def test_initial_regions() -> None:
    b = Board.initial()
    assert b.region_sizes(BLACK) == [6, 6]
    assert b.region_sizes(WHITE) == [6, 6]
    assert not b.pieces_contiguous(BLACK)
    assert not b.pieces_contiguous(WHITE)


@pytest.mark.parametrize(
    "position",
    [
        "1bbbbbb1/w6w/w6w/w6w/w6w/w6w/w6w/1bbbbbb1 b",
        "2b1bb2/w2b3w/1w2w2w/w2bb3/4w2w/w1b3w1/3b4/1b2b3 w",
        "8/8/5ww1/3b4/8/1w6/1b6/b7 b",
        "b6b/8/8/8/8/8/8/b6b w",
    ],
)
def test_sizes_sorted_and_sum_to_piece_count(position: str) -> None:
    b = Board.from_position(position)
    for color in (BLACK, WHITE):
        sizes = b.region_sizes(color)
        assert sizes == sorted(sizes, reverse=True)
        assert sum(sizes) == b.piece_count(color)


def test_diagonal_neighbours_connect() -> None:
    b = Board.from_position("8/8/8/8/3b4/2b5/1b6/b7 w")
    assert b.region_sizes(BLACK) == [4]
    assert b.pieces_contiguous(BLACK)


def test_corners_are_separate_regions() -> None:
    b = Board.from_position("b6b/8/8/8/8/8/8/b6b w")
    assert b.region_sizes(BLACK) == [1, 1, 1, 1]


def test_mixed_sizes() -> None:
    # a1-b2-c1 chain, lone e5, and a g7/h8/h7 cluster
    b = Board.from_position("7b/6bb/8/4b3/8/8/1b6/b1b5 w")
    assert b.region_sizes(BLACK) == [3, 3, 1]


def test_no_pieces_is_not_contiguous() -> None:
    b = Board.from_position("8/8/8/8/8/8/8/b7 w")
    assert b.region_sizes(WHITE) == []
    assert not b.pieces_contiguous(WHITE)
    assert regions.contiguous(b.grid, BLACK)


def test_region_sizes_returns_a_copy() -> None:
    b = Board.initial()
    sizes = b.region_sizes(BLACK)
    sizes.append(99)
    assert b.region_sizes(BLACK) == [6, 6]
