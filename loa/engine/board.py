from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Final, List, Optional, Sequence, Tuple, Union

from . import regions
from .move import Move
from .piece import BLACK, EMPTY, WHITE, Piece
from .square import (
    BOARD_SIZE,
    NUM_SQUARES,
    OPPOSITE_DIRECTION,
    RAYS,
    direction,
    distance,
    sq,
    step_to,
)


logger = logging.getLogger(__name__)

# Default number of moves for each side before a tie is declared
DEFAULT_MOVE_LIMIT: Final = 60

START_POSITION: Final = "1bbbbbb1/w6w/w6w/w6w/w6w/w6w/w6w/1bbbbbb1 b"

CHAR_TO_PIECE: Final = {"b": BLACK, "w": WHITE}


class _Stale(Enum):
    TOKEN = 0


# Marker for a cache entry that must be recomputed before use
STALE: Final = _Stale.TOKEN

WinnerCache = Union[_Stale, Optional[Piece]]
RegionCache = Union[_Stale, Dict[Piece, Tuple[int, ...]]]


def _initial_grid() -> List[Piece]:
    grid = [EMPTY] * NUM_SQUARES
    for c in range(1, BOARD_SIZE - 1):
        grid[sq(c, 0)] = BLACK
        grid[sq(c, BOARD_SIZE - 1)] = BLACK
    for r in range(1, BOARD_SIZE - 1):
        grid[sq(0, r)] = WHITE
        grid[sq(BOARD_SIZE - 1, r)] = WHITE
    return grid


@dataclass(eq=False)
class Board:
    """State of a game of Lines of Action.

    Notes:
    - Squares are 0..63 (a1=0 .. h8=63), row-major from Black's home row.
    - Mutated only through ``apply_move``/``make_move`` and
      ``undo_last_move`` (plus ``set`` when setting up positions). Every
      grid change marks the winner and region caches stale; both are
      recomputed lazily on the next query.
    """

    grid: List[Piece] = field(default_factory=_initial_grid)
    turn: Piece = BLACK
    # total half-moves before a tie, i.e. twice the per-side limit
    move_limit: int = 2 * DEFAULT_MOVE_LIMIT
    # (move, piece previously on the destination) for each applied move
    _history: List[Tuple[Move, Piece]] = field(default_factory=list, repr=False)
    _winner_cache: WinnerCache = field(default=STALE, repr=False)
    _regions_cache: RegionCache = field(default=STALE, repr=False)

    def __post_init__(self) -> None:
        if len(self.grid) != NUM_SQUARES:
            raise ValueError("board must have 64 squares")
        if self.turn is EMPTY:
            raise ValueError("side to move must be BLACK or WHITE")

    @classmethod
    def initial(cls) -> "Board":
        """Create a board in the standard initial position, Black to move."""
        return cls()

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Piece]], turn: Piece = BLACK) -> "Board":
        """Create a board from ``rows``, bottom row (rank 1) first.

        The resulting board has ``get(sq(col, row)) == rows[row][col]``.
        """
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError("rows must be 8x8")
        grid = [rows[r][c] for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)]
        return cls(grid=grid, turn=turn)

    @classmethod
    def from_position(cls, text: str) -> "Board":
        """Create a board from a compact position string.

        Args:
            text (str): Ranks 8..1 separated by ``/`` using ``b``/``w`` for
                pieces and digits for runs of empty squares, then a space and
                the side to move, e.g. ``"1bbbbbb1/w6w/.../1bbbbbb1 b"``.

        Returns:
            Board: Board with that placement and side to move, no history.

        Raises:
            ValueError: If the string is empty, has the wrong number of
                fields or ranks, or contains invalid characters.
        """
        if not text or not isinstance(text, str):
            raise ValueError("position must be a non-empty string")
        parts = text.strip().split()
        if len(parts) != 2:
            raise ValueError("position must have 2 fields")
        placement, stm = parts

        ranks = placement.split("/")
        if len(ranks) != BOARD_SIZE:
            raise ValueError("position must have 8 ranks")
        grid = [EMPTY] * NUM_SQUARES
        for row, rank in enumerate(ranks[::-1]):  # start from rank 1 (bottom)
            col = 0
            for ch in rank:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > BOARD_SIZE:
                        raise ValueError("invalid empty count in position rank")
                    col += n
                else:
                    if ch not in CHAR_TO_PIECE:
                        raise ValueError(f"invalid piece in position: {ch!r}")
                    if col >= BOARD_SIZE:
                        raise ValueError("too many squares in position rank")
                    grid[sq(col, row)] = CHAR_TO_PIECE[ch]
                    col += 1
            if col != BOARD_SIZE:
                raise ValueError("rank does not sum to 8 squares in position")

        if stm not in CHAR_TO_PIECE:
            raise ValueError("side to move must be 'b' or 'w'")
        return cls(grid=grid, turn=CHAR_TO_PIECE[stm])

    def to_position(self) -> str:
        """Serialize placement and side to move into a position string."""
        ranks: List[str] = []
        for row in range(BOARD_SIZE - 1, -1, -1):
            run = 0
            out = []
            for col in range(BOARD_SIZE):
                p = self.grid[sq(col, row)]
                if p is EMPTY:
                    run += 1
                else:
                    if run > 0:
                        out.append(str(run))
                        run = 0
                    out.append(p.abbrev)
            if run > 0:
                out.append(str(run))
            ranks.append("".join(out))
        return "/".join(ranks) + " " + self.turn.abbrev

    def copy(self) -> "Board":
        """Return an independent copy of this board, history included."""
        return Board(
            grid=list(self.grid),
            turn=self.turn,
            move_limit=self.move_limit,
            _history=list(self._history),
            _winner_cache=self._winner_cache,
            _regions_cache=self._regions_cache,
        )

    def copy_from(self, other: "Board") -> None:
        """Set my state to a copy of ``other``."""
        if other is self:
            return
        self.grid = list(other.grid)
        self.turn = other.turn
        self.move_limit = other.move_limit
        self._history = list(other._history)
        self._winner_cache = other._winner_cache
        self._regions_cache = other._regions_cache

    # --- Squares ---
    def get(self, s: int) -> Piece:
        return self.grid[s]

    def set(self, s: int, piece: Piece, next_turn: Optional[Piece] = None) -> None:
        """Place ``piece`` on ``s`` and optionally set the side to move."""
        self.grid[s] = piece
        if next_turn is not None:
            self.turn = next_turn
        self._invalidate()

    def piece_count(self, color: Piece) -> int:
        return sum(1 for p in self.grid if p is color)

    def _invalidate(self) -> None:
        self._winner_cache = STALE
        self._regions_cache = STALE

    # --- Move history / limits ---
    def moves_made(self) -> int:
        return len(self._history)

    def history(self) -> List[Move]:
        return [mv for mv, _ in self._history]

    def set_move_limit(self, per_side: int) -> None:
        """Set the number of moves per side after which the game is a tie.

        Raises:
            ValueError: If ``2 * per_side`` does not exceed the number of
                moves already made.
        """
        if 2 * per_side <= self.moves_made():
            raise ValueError("move limit too small")
        self.move_limit = 2 * per_side
        self._winner_cache = STALE

    # --- Legality ---
    def line_count(self, s: int, dir: int) -> int:
        """Number of pieces on the whole line through ``s`` along ``dir``.

        Counts both directions to the board edges, ``s`` included.
        """
        grid = self.grid
        count = 0 if grid[s] is EMPTY else 1
        for t in RAYS[s][dir]:
            if grid[t] is not EMPTY:
                count += 1
        for t in RAYS[s][OPPOSITE_DIRECTION[dir]]:
            if grid[t] is not EMPTY:
                count += 1
        return count

    def is_legal(self, move: Optional[Move]) -> bool:
        """Return True iff ``move`` is legal for the side to move."""
        if move is None:
            return False
        return self.is_legal_squares(move.from_sq, move.to_sq)

    def is_legal_squares(self, frm: int, to: int) -> bool:
        """Return True iff moving from ``frm`` to ``to`` is legal.

        Illegal input never raises: misaligned squares, a source that is not
        the mover's piece, a distance different from the line count, an
        opposing piece in the way, or an own piece on the destination all
        yield False.
        """
        if not (0 <= frm < NUM_SQUARES and 0 <= to < NUM_SQUARES):
            return False
        dir = direction(frm, to)
        if dir is None:
            return False
        grid = self.grid
        mover = self.turn
        if grid[frm] is not mover:
            return False
        dist = distance(frm, to)
        if self.line_count(frm, dir) != dist:
            return False
        opp = mover.opposite()
        ray = RAYS[frm][dir]
        for i in range(dist - 1):
            if grid[ray[i]] is opp:
                return False
        return grid[to] is not mover

    def legal_moves(self) -> List[Move]:
        """Return all legal moves for the side to move."""
        moves: List[Move] = []
        grid = self.grid
        mover = self.turn
        for frm in range(NUM_SQUARES):
            if grid[frm] is not mover:
                continue
            for dir in range(len(OPPOSITE_DIRECTION)):
                to = step_to(frm, dir, self.line_count(frm, dir))
                if to is not None and self.is_legal_squares(frm, to):
                    moves.append(Move(frm, to))
        return moves

    def has_legal_moves(self) -> bool:
        grid = self.grid
        mover = self.turn
        for frm in range(NUM_SQUARES):
            if grid[frm] is not mover:
                continue
            for dir in range(len(OPPOSITE_DIRECTION)):
                to = step_to(frm, dir, self.line_count(frm, dir))
                if to is not None and self.is_legal_squares(frm, to):
                    return True
        return False

    # --- Mutation ---
    def apply_move(self, move: Move) -> None:
        """Apply a legal ``move`` for the side to move.

        Raises:
            ValueError: If the move is not legal in this position.
        """
        if not self.is_legal(move):
            raise ValueError("illegal move")
        self.make_move(move)

    def make_move(self, move: Move) -> None:
        """Apply ``move`` in-place without a legality check.

        Callers must only pass moves produced by ``legal_moves`` for this
        position (search and perft use this make/unmake fast path).
        """
        frm, to = move.from_sq, move.to_sq
        self._history.append((move, self.grid[to]))
        self.grid[to] = self.grid[frm]
        self.grid[frm] = EMPTY
        self.turn = self.turn.opposite()
        self._invalidate()

    def undo_last_move(self) -> Move:
        """Retract the last move, restoring the prior position and turn.

        Returns:
            Move: The move that was retracted.

        Raises:
            ValueError: If no move has been made.
        """
        if not self._history:
            raise ValueError("no moves to undo")
        move, captured = self._history.pop()
        frm, to = move.from_sq, move.to_sq
        self.grid[frm] = self.grid[to]
        self.grid[to] = captured
        self.turn = self.turn.opposite()
        self._invalidate()
        return move

    # --- Regions and outcome ---
    def region_sizes(self, color: Piece) -> List[int]:
        """Sizes of ``color``'s connected regions, largest first (cached)."""
        if color is EMPTY:
            raise ValueError("region sizes are defined for BLACK or WHITE")
        cache = self._regions_cache
        if cache is STALE:
            cache = {
                BLACK: tuple(regions.region_sizes(self.grid, BLACK)),
                WHITE: tuple(regions.region_sizes(self.grid, WHITE)),
            }
            self._regions_cache = cache
        return list(cache[color])

    def pieces_contiguous(self, color: Piece) -> bool:
        """Return True iff all of ``color``'s pieces form one region."""
        return len(self.region_sizes(color)) == 1

    def winner(self) -> Optional[Piece]:
        """Return the winning side, ``EMPTY`` for a tie, or None while ongoing.

        If both sides are contiguous, the side that made the last move wins.
        """
        if self._winner_cache is STALE:
            black = self.pieces_contiguous(BLACK)
            white = self.pieces_contiguous(WHITE)
            result: Optional[Piece]
            if black and white:
                result = self.turn.opposite()
            elif black:
                result = BLACK
            elif white:
                result = WHITE
            elif self.moves_made() >= self.move_limit:
                result = EMPTY
            else:
                result = None
            self._winner_cache = result
        return self._winner_cache

    def game_over(self) -> bool:
        return self.winner() is not None

    # --- Display ---
    def render(self) -> str:
        """Return the reference text rendering of the board."""
        lines = ["==="]
        for row in range(BOARD_SIZE - 1, -1, -1):
            cells = "".join(f"{self.grid[sq(c, row)].abbrev} " for c in range(BOARD_SIZE))
            lines.append("    " + cells)
        lines.append(f"Next move: {self.turn.full_name}")
        lines.append("===")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid and self.turn is other.turn

    __hash__ = None  # type: ignore[assignment]
