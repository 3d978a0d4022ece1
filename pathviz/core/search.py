# pathviz/core/search.py
#!/usr/bin/env python3
"""
Grid searches as step-wise state machines. One pop per step(), which suits animation.

All four algorithms share GridSearch:
- init(grid, start, end) - reset() - step() -> StepResult - steps() - events()

steps() is the single stepping loop; solve(), events() and the runner all consume it.

Subclasses supply the frontier discipline and the expansion rule:
- BFS       FIFO queue, neighbors marked reached when inserted
- DFS       LIFO stack, neighbors marked reached when inserted
- Dijkstra  priority set on dist, relax if dist[u] + 1 < dist[v]
- A*        priority set on f = g + manhattan, update if v unseen or g improves

Equal priorities pop in first-insertion order; neighbors are inserted in
up/down/left/right order (see GridModel.neighbors).
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Type
from math import inf

from pathviz.core.errors import InvalidSelection, MissingEndpoints, UnknownAlgorithm
from pathviz.core.frontiers import FIFOFrontier, LIFOFrontier, PrioritySet
from pathviz.core.grid import GridModel
from pathviz.core.path import reconstruct_path
from pathviz.core.types import (
    Cell, StepResult, SearchResult, Visited, RunOutcome, FOUND, NOT_FOUND,
)


def manhattan(a: Cell, b: Cell) -> int:
    """Admissible and consistent for unit-cost 4-connected moves."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class GridSearch:
    name: str = "search"

    # Internal state
    grid: Optional[GridModel] = None
    start: Optional[Cell] = None
    end: Optional[Cell] = None
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    closed_set: set = field(default_factory=set)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False

    # -------------------- lifecycle --------------------

    def init(self, grid: GridModel, start: Optional[Cell] = None, end: Optional[Cell] = None) -> None:
        """Bind to a grid. start/end default to the grid's own endpoints."""
        start = grid.start if start is None else tuple(start)
        end = grid.end if end is None else tuple(end)
        if start is None or end is None:
            raise MissingEndpoints("both a start and an end cell are required")
        for label, c in (("start", start), ("end", end)):
            if not grid.in_bounds(c):
                raise InvalidSelection(f"{label} {c} is outside the {grid.rows}x{grid.cols} grid")
            if grid.is_wall(c):
                raise InvalidSelection(f"{label} {c} is a wall")
        self.grid = grid
        self.start = start
        self.end = end
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed with the start cell."""
        if self.grid is None:
            return
        self.parent.clear()
        self.closed_set.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self._seed(self.start)

    # -------------------- hooks --------------------

    def _seed(self, s: Cell) -> None:
        raise NotImplementedError

    def _pop(self) -> Optional[Cell]:
        raise NotImplementedError

    def _expand(self, u: Cell) -> List[Cell]:
        """Push admissible neighbors of u; return the cells newly opened."""
        raise NotImplementedError

    def _open_size(self) -> int:
        raise NotImplementedError

    def _passable(self, v: Cell) -> bool:
        return not self.grid.is_wall(v)

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE pop:
          - Empty frontier -> "exhausted".
          - Popped the end cell -> "found", with the full path.
          - Else expand and report the popped cell ("running").
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = reconstruct_path(self.parent, self.start, self.end)
            return StepResult(status="found", current=self.end, path=path,
                              metrics=self._metrics(path_len=len(path) - 1))

        if self.no_path:
            return StepResult(status="exhausted", metrics=self._metrics())

        u = self._pop()
        if u is None:
            self.no_path = True
            return StepResult(status="exhausted", metrics=self._metrics())

        self.popped_count += 1
        self.closed_set.add(u)

        if u == self.end:
            self.done = True
            path = reconstruct_path(self.parent, self.start, self.end)
            return StepResult(status="found", current=u, path=path,
                              metrics=self._metrics(path_len=len(path) - 1))

        opened = self._expand(u)
        return StepResult(status="running", current=u, visited=u != self.start,
                          opened=opened, metrics=self._metrics())

    def steps(self) -> Iterator[StepResult]:
        """Every StepResult up to and including the terminal "found" / "exhausted" one."""
        if self.grid is None:
            raise RuntimeError("init() must be called before steps()")
        while True:
            res = self.step()
            yield res
            if res.status in ("found", "exhausted"):
                return

    def events(self) -> Iterator[object]:
        """Visited(cell) per visited pop, then a terminal RunOutcome."""
        for res in self.steps():
            if res.status == "found":
                yield RunOutcome(FOUND)
            elif res.status == "exhausted":
                yield RunOutcome(NOT_FOUND)
            elif res.visited:
                yield Visited(res.current)

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": self._open_size(),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
        }


@dataclass
class _ReachedSearch(GridSearch):
    """Shared body of BFS and DFS: cells count as reached the moment they are inserted."""

    frontier: object = None
    reached: set = field(default_factory=set)

    def _new_frontier(self):
        raise NotImplementedError

    def _seed(self, s: Cell) -> None:
        self.frontier = self._new_frontier()
        self.reached = {s}
        self.frontier.push(s)

    def _pop(self) -> Optional[Cell]:
        return self.frontier.pop()

    def _expand(self, u: Cell) -> List[Cell]:
        opened: List[Cell] = []
        for v in self.grid.neighbors(u):
            if v not in self.reached and self._passable(v):
                self.reached.add(v)
                self.parent[v] = u
                self.frontier.push(v)
                opened.append(v)
        return opened

    def _open_size(self) -> int:
        return len(self.frontier) if self.frontier is not None else 0


@dataclass
class BFSSearch(_ReachedSearch):
    name: str = "BFS"

    def _new_frontier(self):
        return FIFOFrontier()


@dataclass
class DFSSearch(_ReachedSearch):
    name: str = "DFS"

    def _new_frontier(self):
        return LIFOFrontier()


@dataclass
class DijkstraSearch(GridSearch):
    name: str = "Dijkstra"

    open_pq: PrioritySet = field(default_factory=PrioritySet)
    dist: Dict[Cell, int] = field(default_factory=dict)

    def _seed(self, s: Cell) -> None:
        self.open_pq = PrioritySet()
        self.dist = {s: 0}
        self.open_pq.push(s, 0)

    def _pop(self) -> Optional[Cell]:
        return self.open_pq.pop()

    def _expand(self, u: Cell) -> List[Cell]:
        opened: List[Cell] = []
        for v in self.grid.neighbors(u):
            if not self._passable(v) or v in self.closed_set:
                continue
            alt = self.dist[u] + 1
            if alt < self.dist.get(v, inf):
                if v not in self.open_pq:
                    opened.append(v)
                self.dist[v] = alt
                self.parent[v] = u
                self.open_pq.push(v, alt)
        return opened

    def _open_size(self) -> int:
        return len(self.open_pq)


@dataclass
class AStarSearch(GridSearch):
    name: str = "A*"

    open_pq: PrioritySet = field(default_factory=PrioritySet)
    g: Dict[Cell, int] = field(default_factory=dict)
    f: Dict[Cell, int] = field(default_factory=dict)

    def _h(self, c: Cell) -> int:
        return manhattan(c, self.end)

    def _seed(self, s: Cell) -> None:
        self.open_pq = PrioritySet()
        self.g = {s: 0}
        self.f = {s: self._h(s)}
        self.open_pq.push(s, self.f[s])

    def _pop(self) -> Optional[Cell]:
        return self.open_pq.pop()

    def _expand(self, u: Cell) -> List[Cell]:
        opened: List[Cell] = []
        for v in self.grid.neighbors(u):
            if v in self.closed_set or not self._passable(v):
                continue
            tentative = self.g[u] + 1
            if v not in self.open_pq:
                opened.append(v)
            elif tentative >= self.g[v]:
                continue
            self.parent[v] = u
            self.g[v] = tentative
            self.f[v] = tentative + self._h(v)
            self.open_pq.push(v, self.f[v])
        return opened

    def _open_size(self) -> int:
        return len(self.open_pq)


# -------------------- registry --------------------

ALGORITHMS: Dict[str, Type[GridSearch]] = {
    "bfs": BFSSearch,
    "dfs": DFSSearch,
    "dijkstra": DijkstraSearch,
    "astar": AStarSearch,
}

_ALIASES = {"a*": "astar", "a-star": "astar", "a_star": "astar"}


def canonical_name(name: str) -> str:
    """Map a selector value ("aStar", "A*", "BFS", ...) to a registry key."""
    key = str(name).strip().lower()
    key = _ALIASES.get(key, key)
    if key not in ALGORITHMS:
        raise UnknownAlgorithm(f"unknown algorithm {name!r}; choose one of {sorted(ALGORITHMS)}")
    return key


def make_algorithm(name: str) -> GridSearch:
    return ALGORITHMS[canonical_name(name)]()


def solve(name: str, grid: GridModel, start: Optional[Cell] = None,
          end: Optional[Cell] = None) -> SearchResult:
    """Run a search to completion without pacing. Used by tests and comparisons."""
    algo = make_algorithm(name)
    algo.init(grid, start, end)
    order: List[Cell] = []
    for res in algo.steps():
        if res.visited:
            order.append(res.current)
    if res.status == "found":
        return SearchResult(algo.name, FOUND, order, res.path, res.metrics)
    return SearchResult(algo.name, NOT_FOUND, order, [], res.metrics)
