from __future__ import annotations

from typing import Dict

from .board import Board


def perft(board: Board, depth: int) -> int:
    """Count move paths of length `depth` from `board`.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).
    - decided positions are leaves: they count as 1 at any depth.

    Uses make/unmake on `board`; the board is restored before returning.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0 or board.game_over():
        return 1

    nodes = 0
    for m in board.legal_moves():
        board.make_move(m)
        try:
            nodes += perft(board, depth - 1)
        finally:
            board.undo_last_move()
    return nodes


def divide(board: Board, depth: int) -> Dict[str, int]:
    """Split `perft(board, depth)` by root move, keyed by move text.

    The values sum to `perft(board, depth)` for depth >= 1. A decided
    position or depth 0 has no root moves and yields an empty mapping.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    counts: Dict[str, int] = {}
    if depth == 0 or board.game_over():
        return counts
    for m in board.legal_moves():
        board.make_move(m)
        try:
            counts[m.to_text()] = perft(board, depth - 1)
        finally:
            board.undo_last_move()
    return counts
