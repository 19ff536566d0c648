"""Connected-region analysis for win detection.

Pure functions over a 64-entry grid of pieces. Regions use 8-directional
adjacency.
"""

from __future__ import annotations

from typing import List, Sequence

from .piece import Piece
from .square import ADJACENT, NUM_SQUARES


def region_sizes(grid: Sequence[Piece], color: Piece) -> List[int]:
    """Return the sizes of ``color``'s connected regions, largest first.

    Iterative flood fill with an explicit work list; each square is visited
    at most once per call.
    """
    seen = [False] * NUM_SQUARES
    sizes: List[int] = []
    for start in range(NUM_SQUARES):
        if seen[start] or grid[start] is not color:
            continue
        seen[start] = True
        stack = [start]
        size = 0
        while stack:
            s = stack.pop()
            size += 1
            for n in ADJACENT[s]:
                if not seen[n] and grid[n] is color:
                    seen[n] = True
                    stack.append(n)
        sizes.append(size)
    sizes.sort(reverse=True)
    return sizes


def contiguous(grid: Sequence[Piece], color: Piece) -> bool:
    # A side with no pieces has no regions and is not contiguous
    return len(region_sizes(grid, color)) == 1
