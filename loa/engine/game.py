from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .board import Board
from .move import Move
from .piece import Piece


logger = logging.getLogger(__name__)


@dataclass
class Game:
    """Game wrapper around a board with helper operations.

    Responsibility: track board state, expose legal moves, apply and retract
    moves with validation.
    """

    board: Board

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.initial())

    @classmethod
    def from_position(cls, text: str) -> "Game":
        return cls(board=Board.from_position(text))

    def to_position(self) -> str:
        return self.board.to_position()

    def legal_moves(self) -> List[Move]:
        return self.board.legal_moves()

    def apply_move(self, move: Move) -> None:
        if self.board.game_over():
            raise ValueError("game is over")
        self.board.apply_move(move)
        logger.debug("move %s applied, %d made", move.to_text(), self.board.moves_made())

    def undo_move(self) -> Move:
        move = self.board.undo_last_move()
        logger.debug("move %s undone, %d made", move.to_text(), self.board.moves_made())
        return move

    def set_move_limit(self, per_side: int) -> None:
        self.board.set_move_limit(per_side)

    # --- State flags for protocol ---
    def turn(self) -> Piece:
        return self.board.turn

    def winner(self) -> Optional[Piece]:
        return self.board.winner()

    def game_over(self) -> bool:
        return self.board.game_over()

    def move_history_text(self) -> List[str]:
        return [m.to_text() for m in self.board.history()]
