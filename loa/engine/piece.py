from __future__ import annotations

from enum import Enum


class Piece(Enum):
    """Contents of a square: empty or a piece of one side."""

    EMPTY = "-"
    BLACK = "b"
    WHITE = "w"

    @property
    def abbrev(self) -> str:
        return self.value

    @property
    def full_name(self) -> str:
        return self.name.capitalize()

    def opposite(self) -> "Piece":
        """Return the other side's piece.

        Raises:
            ValueError: If called on ``EMPTY``.
        """
        if self is Piece.BLACK:
            return Piece.WHITE
        if self is Piece.WHITE:
            return Piece.BLACK
        raise ValueError("EMPTY has no opposite")

    @classmethod
    def parse(cls, text: str) -> "Piece":
        """Parse a side name (``b``, ``black``, ``w``, ``white``)."""
        t = text.strip().lower()
        if t in ("b", "black"):
            return cls.BLACK
        if t in ("w", "white"):
            return cls.WHITE
        raise ValueError(f"invalid side: {text!r}")


BLACK = Piece.BLACK
WHITE = Piece.WHITE
EMPTY = Piece.EMPTY
