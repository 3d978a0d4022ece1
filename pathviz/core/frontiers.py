# pathviz/core/frontiers.py
from collections import deque
from typing import Dict, List, Optional, Set, Tuple
import heapq
from math import inf

from pathviz.core.types import Cell


class FIFOFrontier:
    def __init__(self):
        self.q = deque()
    def push(self, c: Cell, priority: float = 0) -> None: self.q.append(c)
    def pop(self) -> Optional[Cell]: return self.q.popleft() if self.q else None
    def __len__(self): return len(self.q)


class LIFOFrontier:
    def __init__(self):
        self.q: List[Cell] = []
    def push(self, c: Cell, priority: float = 0) -> None: self.q.append(c)
    def pop(self) -> Optional[Cell]: return self.q.pop() if self.q else None
    def __len__(self): return len(self.q)


class PrioritySet:
    """
    Min-priority set of cells.

    Each cell keeps the sequence number of its FIRST insertion, so equal priorities
    pop in first-insertion order even after a cell's priority has been lowered.
    Re-pushing a cell updates its priority; superseded heap entries are dropped on pop.
    """

    def __init__(self):
        self.h: List[Tuple[float, int, Cell]] = []
        self.priority: Dict[Cell, float] = {}
        self.order: Dict[Cell, int] = {}
        self.seq = 0

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def push(self, c: Cell, priority: float) -> None:
        if c not in self.order:
            self.order[c] = self._bump()
        if priority < self.priority.get(c, inf):
            self.priority[c] = priority
            heapq.heappush(self.h, (priority, self.order[c], c))

    def pop(self) -> Optional[Cell]:
        while self.h:
            p, _, c = heapq.heappop(self.h)
            # stale: cell already popped or priority lowered since this entry
            if self.priority.get(c) != p:
                continue
            del self.priority[c]
            return c
        return None

    def __contains__(self, c: Cell) -> bool:
        return c in self.priority

    def __len__(self): return len(self.priority)

    def members(self) -> Set[Cell]:
        return set(self.priority)
