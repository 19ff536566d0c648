from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn

from loa.protocol.text.loop import run_text
from loa.search.service import DEFAULT_DEPTH


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="loa", description="Lines of Action engine")
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (default: WARNING)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP game service")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    play = sub.add_parser("play", help="Play on the terminal (stdin/stdout)")
    play.add_argument(
        "--depth", type=int, default=DEFAULT_DEPTH, help=f"Search depth (default: {DEFAULT_DEPTH})"
    )
    play.add_argument("--limit", type=int, default=None, help="Moves per side before a tie")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    if args.command == "serve":
        uvicorn.run(
            "loa.protocol.http.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            log_level=args.log_level.lower(),
        )
    else:
        run_text(depth=args.depth, move_limit=args.limit)


if __name__ == "__main__":
    main()
