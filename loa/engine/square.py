from __future__ import annotations

from typing import Final, Optional, Tuple


BOARD_SIZE: Final = 8
NUM_SQUARES: Final = BOARD_SIZE * BOARD_SIZE

# Direction codes, clockwise from north
N, NE, E, SE, S, SW, W, NW = range(8)
DIRECTION_DELTAS: Final = (
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
)
OPPOSITE_DIRECTION: Final = (S, SW, W, NW, N, NE, E, SE)


def sq(col: int, row: int) -> int:
    """Return the square index for ``(col, row)``.

    Args:
        col (int): Column 0..7 (file a..h).
        row (int): Row 0..7 (rank 1..8).

    Returns:
        int: Zero-based square index, ``row * 8 + col``.

    Raises:
        ValueError: If either coordinate is off the board.
    """
    if not (0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE):
        raise ValueError(f"square out of range: ({col}, {row})")
    return row * BOARD_SIZE + col


def col_of(s: int) -> int:
    return s % BOARD_SIZE


def row_of(s: int) -> int:
    return s // BOARD_SIZE


def is_aligned(frm: int, to: int) -> bool:
    """Return True iff ``to`` shares a rank, file or diagonal with ``frm``."""
    if frm == to:
        return False
    dc = col_of(to) - col_of(frm)
    dr = row_of(to) - row_of(frm)
    return dc == 0 or dr == 0 or abs(dc) == abs(dr)


def direction(frm: int, to: int) -> Optional[int]:
    """Return the direction code from ``frm`` towards ``to``.

    Returns:
        Optional[int]: One of ``N .. NW`` when the squares are aligned,
            otherwise ``None``.
    """
    if not is_aligned(frm, to):
        return None
    dc = col_of(to) - col_of(frm)
    dr = row_of(to) - row_of(frm)
    unit = ((dc > 0) - (dc < 0), (dr > 0) - (dr < 0))
    return DIRECTION_DELTAS.index(unit)


def distance(frm: int, to: int) -> int:
    """Number of single steps between two aligned squares."""
    return max(abs(col_of(to) - col_of(frm)), abs(row_of(to) - row_of(frm)))


def step_to(s: int, dir: int, steps: int = 1) -> Optional[int]:
    """Return the square ``steps`` away from ``s`` in ``dir``, or None if off-board."""
    dc, dr = DIRECTION_DELTAS[dir]
    c = col_of(s) + dc * steps
    r = row_of(s) + dr * steps
    if not (0 <= c < BOARD_SIZE and 0 <= r < BOARD_SIZE):
        return None
    return r * BOARD_SIZE + c


def line_squares(s: int, dir: int) -> Tuple[int, ...]:
    """Squares from ``s`` (exclusive) towards the board edge along ``dir``."""
    out = []
    nxt = step_to(s, dir)
    while nxt is not None:
        out.append(nxt)
        nxt = step_to(nxt, dir)
    return tuple(out)


def _adjacent(s: int) -> Tuple[int, ...]:
    return tuple(
        n for n in (step_to(s, d) for d in range(len(DIRECTION_DELTAS))) if n is not None
    )


# Precomputed neighbour and ray tables
ADJACENT: Final = tuple(_adjacent(s) for s in range(NUM_SQUARES))
RAYS: Final = tuple(
    tuple(line_squares(s, d) for d in range(len(DIRECTION_DELTAS))) for s in range(NUM_SQUARES)
)


def adjacent(s: int) -> Tuple[int, ...]:
    """Return the up-to-8 in-bounds neighbours of ``s``."""
    return ADJACENT[s]


def str_to_square(s: str) -> int:
    """Convert algebraic notation into a 0-based square index.

    Args:
        s (str): Square name such as ``"d5"``.

    Returns:
        int: Zero-based square index.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    return sq(ord(s[0]) - ord("a"), int(s[1]) - 1)


def square_to_str(idx: int) -> str:
    """Convert a 0-based square index into algebraic notation.

    Raises:
        ValueError: If ``idx`` is outside the valid square range.
    """
    if idx < 0 or idx >= NUM_SQUARES:
        raise ValueError(f"invalid square index: {idx}")
    return chr(ord("a") + col_of(idx)) + str(row_of(idx) + 1)
