from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Final, Optional

from loa.engine.board import Board
from loa.engine.move import Move
from loa.engine.piece import WHITE
from loa.eval import INFINITY, evaluate


logger = logging.getLogger(__name__)

DEFAULT_DEPTH: Final = 3


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: int
    nodes: int
    cutoffs: int
    depth: int
    time_ms: int


class SearchService:
    """Fixed-depth minimax search with alpha-beta pruning.

    Scores are White-positive (see ``loa.eval``): White maximizes and Black
    minimizes.
    """

    def __init__(self, depth: int = DEFAULT_DEPTH) -> None:
        if depth < 0:
            raise ValueError("depth must be >= 0")
        self.depth = depth

    def choose_move(self, board: Board) -> Move:
        """Return the move the automated player makes on ``board``.

        Raises:
            ValueError: If the game is over or the side to move has no moves.
        """
        res = self.search(board)
        if res.best_move is None:
            raise ValueError("no legal moves")
        return res.best_move

    def search(
        self,
        board: Board,
        depth: Optional[int] = None,
        *,
        enable_pruning: bool = True,
    ) -> SearchResult:
        """Search ``board`` for the side to move.

        Args:
            board (Board): Position to search; never modified.
            depth (Optional[int]): Plies to search, defaults to ``self.depth``.
            enable_pruning (bool): When False every node is searched with a
                full window and no cutoffs (plain minimax).

        Returns:
            SearchResult: Root score, chosen move (None at depth 0 or when
                the side to move has no moves) and node statistics.

        Raises:
            ValueError: If the game on ``board`` is already over, or
                ``depth`` is negative.
        """
        if board.game_over():
            raise ValueError("game is over")
        d = self.depth if depth is None else depth
        if d < 0:
            raise ValueError("depth must be >= 0")

        # Private working copy; make/unmake keeps sibling branches independent
        work = board.copy()
        nodes = 0
        cutoffs = 0
        found: Optional[Move] = None

        def find_move(depth: int, save_move: bool, sense: int, alpha: int, beta: int) -> int:
            # Returns the value of `work` searched `depth` plies deep. With
            # sense == 1 the value is maximal (or >= beta), with sense == -1
            # minimal (or <= alpha). Records the chosen move iff save_move.
            nonlocal nodes, cutoffs, found
            nodes += 1
            if depth == 0 or work.game_over():
                return evaluate(work)
            moves = work.legal_moves()
            if not moves:
                return evaluate(work)
            if not enable_pruning:
                alpha, beta = -INFINITY, INFINITY

            best_move: Optional[Move] = None
            if sense == 1:
                best = alpha
                for mv in moves:
                    work.make_move(mv)
                    try:
                        score = find_move(depth - 1, False, -1, alpha, beta)
                    finally:
                        work.undo_last_move()
                    if score > best:
                        best = score
                        best_move = mv
                        if enable_pruning:
                            alpha = max(alpha, best)
                            if alpha >= beta:
                                cutoffs += 1
                                break
            else:
                best = beta
                for mv in moves:
                    work.make_move(mv)
                    try:
                        score = find_move(depth - 1, False, 1, alpha, beta)
                    finally:
                        work.undo_last_move()
                    if score < best:
                        best = score
                        best_move = mv
                        if enable_pruning:
                            beta = min(beta, best)
                            if alpha >= beta:
                                cutoffs += 1
                                break

            if save_move:
                found = best_move
            return best

        start = time.perf_counter()
        sense = 1 if board.turn is WHITE else -1
        score = find_move(d, True, sense, -INFINITY, INFINITY)
        time_ms = int((time.perf_counter() - start) * 1000)

        logger.debug(
            "search depth=%d nodes=%d cutoffs=%d score=%d move=%s time_ms=%d",
            d,
            nodes,
            cutoffs,
            score,
            found.to_text() if found else "(none)",
            time_ms,
        )
        return SearchResult(
            best_move=found,
            score=score,
            nodes=nodes,
            cutoffs=cutoffs,
            depth=d,
            time_ms=time_ms,
        )
