#!/usr/bin/env python3
# ruff: noqa: E402
"""Move-path counts for Lines of Action positions.

Prints one line per depth from 1 up to ``--depth``; with ``--divide`` the
deepest count is also broken down by root move, which helps narrow a
move-generation mismatch to a single line of play.
"""
from __future__ import annotations

import argparse
import os
import sys
import time
from typing import List, Optional

REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from loa.engine.board import Board, START_POSITION
from loa.engine.perft import divide, perft


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Count move paths from a position")
    parser.add_argument(
        "position",
        nargs="?",
        default=START_POSITION,
        help="Position string, e.g. '1bbbbbb1/w6w/.../1bbbbbb1 b' (default: initial position)",
    )
    parser.add_argument("--depth", type=int, default=2, help="Deepest depth to count (default: 2)")
    parser.add_argument(
        "--divide", action="store_true", help="Break the deepest count down by root move"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    board = Board.from_position(args.position)
    print(board.render())

    for depth in range(1, args.depth + 1):
        start = time.perf_counter()
        nodes = perft(board, depth)
        ms = int((time.perf_counter() - start) * 1000)
        print(f"depth {depth:2d}  nodes {nodes:>12,}  {ms:>7d} ms")

    if args.divide and args.depth >= 1:
        split = divide(board, args.depth)
        for move_text in sorted(split):
            print(f"  {move_text}: {split[move_text]}")
        print(f"  {len(split)} moves, {sum(split.values())} nodes")


if __name__ == "__main__":
    main()
