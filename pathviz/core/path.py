# pathviz/core/path.py
#!/usr/bin/env python3
"""
Path reconstruction from a predecessor map.

Only valid after a search reported "found": the end cell must have a predecessor
chain back to the start. Anything else raises ReconstructionMisuse.
"""

from typing import Dict, Iterator, List

from pathviz.core.errors import ReconstructionMisuse
from pathviz.core.types import Cell


def _walk_back(parents: Dict[Cell, Cell], start: Cell, end: Cell) -> Iterator[Cell]:
    """Yield end, parent(end), ... , start."""
    cur = end
    seen = 0
    while True:
        yield cur
        if cur == start:
            return
        if cur not in parents:
            raise ReconstructionMisuse(f"{cur} has no predecessor; {end} is not reachable from {start}")
        cur = parents[cur]
        seen += 1
        # a chain longer than the map itself must loop
        if seen > len(parents):
            raise ReconstructionMisuse(f"predecessor map has a cycle through {cur}")


def reconstruct_path(parents: Dict[Cell, Cell], start: Cell, end: Cell) -> List[Cell]:
    """Full path start -> end, inclusive. [start] when start == end."""
    path = list(_walk_back(parents, start, end))
    path.reverse()
    return path


def path_steps(parents: Dict[Cell, Cell], start: Cell, end: Cell) -> Iterator[Cell]:
    """
    Intermediate path cells in end -> start order, for painting.

    Neither end (already distinct) nor start (keeps its look for the whole run) is yielded.
    The chain is validated up front so a bad map fails before anything is emitted.
    """
    chain = list(_walk_back(parents, start, end))
    for c in chain[1:-1]:
        yield c
