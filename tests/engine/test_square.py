from __future__ import annotations

import pytest

from loa.engine.square import (
    E,
    N,
    NE,
    OPPOSITE_DIRECTION,
    SW,
    W,
    adjacent,
    direction,
    distance,
    is_aligned,
    sq,
    square_to_str,
    step_to,
    str_to_square,
)


def test_square_names_round_trip() -> None:
    assert str_to_square("a1") == 0
    assert str_to_square("h8") == 63
    assert square_to_str(sq(3, 4)) == "d5"
    for idx in range(64):
        assert str_to_square(square_to_str(idx)) == idx


@pytest.mark.parametrize("name", ["", "a", "a9", "i1", "a0", "a10"])
def test_invalid_square_names(name: str) -> None:
    with pytest.raises(ValueError):
        str_to_square(name)


def test_alignment_and_direction() -> None:
    a1, c3, a4, d1, b3 = (str_to_square(s) for s in ("a1", "c3", "a4", "d1", "b3"))
    assert is_aligned(a1, c3) and direction(a1, c3) == NE and distance(a1, c3) == 2
    assert is_aligned(a1, a4) and direction(a1, a4) == N and distance(a1, a4) == 3
    assert is_aligned(a1, d1) and direction(a1, d1) == E
    assert direction(c3, a1) == SW
    assert direction(d1, a1) == W
    assert not is_aligned(a1, b3) and direction(a1, b3) is None
    assert not is_aligned(a1, a1)


def test_opposite_direction_table() -> None:
    assert len(OPPOSITE_DIRECTION) == 8
    for d in range(8):
        assert OPPOSITE_DIRECTION[OPPOSITE_DIRECTION[d]] == d
        assert OPPOSITE_DIRECTION[d] == (d + 4) % 8


def test_adjacent_counts() -> None:
    assert len(adjacent(str_to_square("a1"))) == 3
    assert len(adjacent(str_to_square("a4"))) == 5
    assert len(adjacent(str_to_square("d4"))) == 8
    assert set(adjacent(str_to_square("a1"))) == {
        str_to_square("a2"),
        str_to_square("b1"),
        str_to_square("b2"),
    }


def test_step_to_stops_at_edge() -> None:
    assert step_to(str_to_square("b1"), N, 2) == str_to_square("b3")
    assert step_to(str_to_square("b1"), E, 6) == str_to_square("h1")
    assert step_to(str_to_square("b1"), W, 2) is None
    assert step_to(str_to_square("h8"), NE, 1) is None
