from __future__ import annotations

import logging
import sys
from typing import Callable, Dict, List, Optional

from ...engine.game import Game
from ...engine.move import parse_move
from ...engine.piece import BLACK, EMPTY, WHITE, Piece
from ...players import LineReader, Player, create_player
from ...search.service import DEFAULT_DEPTH, SearchService


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]

HELP_TEXT = """\
Commands:
  new               start a new game (Black manual, White auto)
  manual <color>    let a person play <color> (black or white)
  auto <color>      let the machine play <color>
  limit <n>         tie after <n> moves per side
  depth <n>         search depth for machine players
  dump              print the board
  undo              take back the last move made by a person
  <from>-<to>       move, e.g. d1-f3
  help              print this message
  quit              leave the program"""


class TextEngine:
    """Line-oriented text adapter around the core engine.

    Notes:
    - Core remains pure; I/O is isolated here.
    - Machine players move automatically whenever it is their turn; a
      person's input is read only when a manual player is on move or the
      game is over.
    """

    def __init__(
        self,
        read_line: LineReader,
        write: Writer,
        depth: int = DEFAULT_DEPTH,
        move_limit: Optional[int] = None,
    ) -> None:
        self._read_line = read_line
        self._write = write
        self.search = SearchService(depth)
        self.move_limit = move_limit
        self.game: Game = Game.new()
        self.players: Dict[Piece, Player] = {}
        self._running = True
        self._announced = False
        self._reported_stall: Optional[str] = None
        self.cmd_new()

    # ---- Main loop ----
    def run(self) -> None:
        while self._running:
            line = self._next_line()
            if line is None:
                break
            self.execute(line)

    def _next_line(self) -> Optional[str]:
        board = self.game.board
        if board.game_over():
            return self._read_line()
        if not board.has_legal_moves():
            self._report_stall()
            return self._read_line()
        try:
            return self.players[board.turn].get_move(self.game)
        except ValueError as e:
            self._error(str(e))
            return self._read_line()

    def execute(self, line: str) -> None:
        text = line.strip()
        if not text or text.startswith("#"):
            return
        parts = text.split()
        cmd, args = parts[0].lower(), parts[1:]
        try:
            if cmd == "new":
                self.cmd_new()
            elif cmd in ("manual", "auto"):
                self.cmd_player(cmd, args)
            elif cmd == "limit":
                self.cmd_limit(args)
            elif cmd == "depth":
                self.cmd_depth(args)
            elif cmd == "dump":
                self._write(self.game.board.render())
            elif cmd == "undo":
                self.cmd_undo()
            elif cmd == "help":
                self._write(HELP_TEXT)
            elif cmd == "quit":
                self._running = False
            else:
                self.cmd_move(text)
        except ValueError as e:
            self._error(str(e))

    # ---- Command handlers ----
    def cmd_new(self) -> None:
        self.game = Game.new()
        if self.move_limit is not None:
            self.game.set_move_limit(self.move_limit)
        self._announced = False
        self._reported_stall = None
        self.players = {
            BLACK: create_player("manual", BLACK, read_line=self._read_line),
            WHITE: create_player("auto", WHITE, search=self.search),
        }

    def cmd_player(self, kind: str, args: List[str]) -> None:
        if len(args) != 1:
            raise ValueError(f"usage: {kind} <color>")
        side = Piece.parse(args[0])
        self.players[side] = create_player(
            kind, side, read_line=self._read_line, search=self.search
        )

    def cmd_limit(self, args: List[str]) -> None:
        n = _parse_int(args, "limit")
        self.game.set_move_limit(n)
        self.move_limit = n

    def cmd_depth(self, args: List[str]) -> None:
        n = _parse_int(args, "depth")
        if n < 1:
            raise ValueError("depth must be >= 1")
        self.search.depth = n

    def cmd_undo(self) -> None:
        self.game.undo_move()
        # Also retract machine replies so that a person is on move again
        while self.game.board.moves_made() > 0 and not self.players[self.game.turn()].is_manual:
            self.game.undo_move()
        self._announced = False

    def cmd_move(self, text: str) -> None:
        move = parse_move(text)
        mover = self.game.turn()
        self.game.apply_move(move)
        if not self.players[mover].is_manual:
            self._write(f"{mover.full_name} moves {move.to_text()}.")
        self._announce_winner()

    # ---- Helpers ----
    def _announce_winner(self) -> None:
        w = self.game.winner()
        if w is None or self._announced:
            return
        self._announced = True
        if w is EMPTY:
            self._write("Tie game.")
        else:
            self._write(f"{w.full_name} wins.")
        logger.info("game over: %s", "tie" if w is EMPTY else w.full_name)

    def _report_stall(self) -> None:
        # Once per position; the loop then waits for commands such as undo
        position = self.game.to_position()
        if position == self._reported_stall:
            return
        self._reported_stall = position
        self._write(f"{self.game.turn().full_name} cannot move.")

    def _error(self, message: str) -> None:
        self._write(f"error: {message}")


def _parse_int(args: List[str], name: str) -> int:
    if len(args) != 1:
        raise ValueError(f"usage: {name} <n>")
    try:
        return int(args[0])
    except ValueError as e:
        raise ValueError(f"invalid number: {args[0]!r}") from e


def _default_writer(line: str) -> None:
    # Ensure newline termination and immediate flush
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def _stdin_reader() -> Optional[str]:
    line = sys.stdin.readline()
    return line if line else None


def run_text(depth: int = DEFAULT_DEPTH, move_limit: Optional[int] = None) -> None:
    TextEngine(_stdin_reader, _default_writer, depth=depth, move_limit=move_limit).run()
