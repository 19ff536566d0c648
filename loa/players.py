from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .engine.game import Game
from .engine.piece import Piece
from .search.service import SearchService


logger = logging.getLogger(__name__)

LineReader = Callable[[], Optional[str]]


class Player(ABC):
    """A participant that supplies moves (as text) for one side."""

    def __init__(self, side: Piece) -> None:
        self.side = side

    @property
    def is_manual(self) -> bool:
        return False

    @abstractmethod
    def get_move(self, game: Game) -> Optional[str]:
        """Return the next move or command text, or None when input ends."""


class HumanPlayer(Player):
    """Reads moves from a line source supplied by the caller."""

    def __init__(self, side: Piece, read_line: LineReader) -> None:
        super().__init__(side)
        self._read_line = read_line

    @property
    def is_manual(self) -> bool:
        return True

    def get_move(self, game: Game) -> Optional[str]:
        return self._read_line()


class MachinePlayer(Player):
    """Chooses moves with a ``SearchService``."""

    def __init__(self, side: Piece, search: Optional[SearchService] = None) -> None:
        super().__init__(side)
        self.search = search or SearchService()

    def get_move(self, game: Game) -> Optional[str]:
        if game.turn() is not self.side:
            raise ValueError(f"not {self.side.full_name}'s turn")
        move = self.search.choose_move(game.board)
        logger.info("%s plays %s", self.side.full_name, move.to_text())
        return move.to_text()


def create_player(
    kind: str,
    side: Piece,
    *,
    read_line: Optional[LineReader] = None,
    search: Optional[SearchService] = None,
) -> Player:
    """Build a ``"manual"`` or ``"auto"`` player for ``side``."""
    if kind == "manual":
        if read_line is None:
            raise ValueError("manual player needs a line reader")
        return HumanPlayer(side, read_line)
    if kind == "auto":
        return MachinePlayer(side, search)
    raise ValueError(f"unknown player kind: {kind!r}")
