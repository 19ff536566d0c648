from __future__ import annotations

from dataclasses import dataclass

from .square import is_aligned, square_to_str, str_to_square


@dataclass(frozen=True)
class Move:
    """Engine-internal move representation.

    Attributes:
        from_sq (int): Origin square index (0-based).
        to_sq (int): Destination square index (0-based).

    The piece captured by a move is recorded by the board's history when the
    move is applied, so the same ``Move`` value can be reused across
    positions.
    """

    from_sq: int
    to_sq: int

    def __post_init__(self) -> None:
        if not is_aligned(self.from_sq, self.to_sq):
            raise ValueError(
                f"squares not on a common line: {self.from_sq} -> {self.to_sq}"
            )

    def to_text(self) -> str:
        """Serialize the move as ``"d1-f3"``."""
        return square_to_str(self.from_sq) + "-" + square_to_str(self.to_sq)

    def __str__(self) -> str:
        return self.to_text()


def parse_move(text: str) -> Move:
    """Parse a move string.

    Args:
        text (str): Move such as ``"d1-f3"``; surrounding whitespace is ignored.

    Returns:
        Move: Parsed move.

    Raises:
        ValueError: If the string is malformed or names squares that do not
            share a rank, file or diagonal.
    """
    t = text.strip()
    if len(t) != 5 or t[2] != "-":
        raise ValueError(f"invalid move: {text!r}")
    return Move(str_to_square(t[0:2]), str_to_square(t[3:5]))
