#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import json
import os
import sys
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

# Ensure repo root (which contains `loa/`) is importable when running directly
REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from loa.engine.board import Board, START_POSITION
from loa.search.service import DEFAULT_DEPTH, SearchResult, SearchService


@dataclass
class BenchItem:
    id: str
    position: str
    depth: Optional[int] = None


DEFAULT_ITEMS: List[BenchItem] = [
    BenchItem("start", START_POSITION),
    BenchItem("middlegame", "2b1bb2/w2b3w/1w2w2w/w2bb3/4w2w/w1b3w1/3b4/1b2b3 w"),
    BenchItem("endgame", "8/8/2bbb3/2wbw3/8/4w3/3w3b/3w4 b"),
]


def load_positions(path: str) -> List[BenchItem]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return [
        BenchItem(
            id=str(obj.get("id", "pos")),
            position=str(obj["position"]),
            depth=(int(obj["depth"]) if obj.get("depth") is not None else None),
        )
        for obj in data.get("positions", [])
    ]


def bench_position(
    svc: SearchService, item: BenchItem, *, depth: Optional[int], iterations: int
) -> Dict[str, Any]:
    eff_depth = item.depth if item.depth is not None else depth
    try:
        board = Board.from_position(item.position)
    except ValueError as e:
        raise ValueError(f"Invalid position for {item.id}: {e}")

    total_time = 0
    total_nodes = 0
    last: Optional[SearchResult] = None
    for _ in range(max(1, iterations)):
        res = svc.search(board, depth=eff_depth)
        total_time += max(0, res.time_ms)
        total_nodes += res.nodes
        last = res

    assert last is not None
    avg_time = int(total_time / max(1, iterations))
    avg_nodes = int(total_nodes / max(1, iterations))
    return {
        "id": item.id,
        "position": item.position,
        "depth": last.depth,
        "best_move": last.best_move.to_text() if last.best_move else None,
        "score": last.score,
        "time_ms": avg_time,
        "nodes": avg_nodes,
        "cutoffs": last.cutoffs,
        "nps": int(avg_nodes * 1000 / max(1, avg_time)),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Time the search over a set of positions")
    parser.add_argument("--positions", default=None, help="Path to positions.json")
    parser.add_argument(
        "--depth", type=int, default=DEFAULT_DEPTH, help="Depth for positions without one"
    )
    parser.add_argument(
        "--iterations", type=int, default=1, help="Repeat runs per position and average"
    )
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    args = parser.parse_args()

    items = load_positions(args.positions) if args.positions else DEFAULT_ITEMS
    if not items:
        raise SystemExit("No positions found in positions file")

    svc = SearchService()
    t0 = time.perf_counter()
    results = [
        bench_position(svc, it, depth=args.depth, iterations=args.iterations) for it in items
    ]
    summary = {
        "results": results,
        "total_nodes": sum(r["nodes"] for r in results),
        "total_time_ms": int((time.perf_counter() - t0) * 1000),
    }
    print(json.dumps(summary, indent=2 if args.pretty else None))


if __name__ == "__main__":
    main()
