"""Static evaluation of Lines of Action positions.

Pure, deterministic, and side-effect free. Scores are from White's point of
view: positive favours White, negative favours Black.
"""

from __future__ import annotations

from typing import Final

from loa.engine.board import Board
from loa.engine.piece import BLACK, EMPTY, WHITE


# Magnitude of a decided game
WINNING_VALUE: Final = 1_000_000
# Larger than any score the search can produce
INFINITY: Final = WINNING_VALUE + 1_000

# Heuristic weight per region of difference between the sides
REGION_WEIGHT: Final = 1_000
# Each side starts with 12 pieces, so at most 12 regions apiece
MAX_PIECES_PER_SIDE: Final = 12
MAX_HEURISTIC: Final = REGION_WEIGHT * (MAX_PIECES_PER_SIDE - 1)


def evaluate(board: Board) -> int:
    """Return a White-positive score for ``board``.

    A contiguous side has won (``winner()`` already resolves the case of
    both sides becoming contiguous at once), so decided games score
    ``+/-WINNING_VALUE`` and 0 for a tie. Ongoing positions compare region
    counts: fewer regions is better.
    """
    w = board.winner()
    if w is WHITE:
        return WINNING_VALUE
    if w is BLACK:
        return -WINNING_VALUE
    if w is EMPTY:
        return 0
    return region_score(board)


def region_score(board: Board) -> int:
    """Heuristic term: region-count difference, White-positive."""
    black = len(board.region_sizes(BLACK))
    white = len(board.region_sizes(WHITE))
    return REGION_WEIGHT * (black - white)
