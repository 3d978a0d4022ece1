# pathviz/core/grid.py
#!/usr/bin/env python3
"""
GridModel: fixed-size 2D grid of cell kinds plus renderer marks.

- Kinds: empty / wall / start / end (exactly one per cell).
- At most one start and one end; walls can never hold either role.
- Marks (visited / path) are annotations for the renderer and never touch kinds.
- neighbors() enumerates up, down, left, right. Every search breaks ties in this order.
"""

from typing import Dict, Iterable, Iterator, List, Optional

from pathviz.core.errors import InvalidSelection
from pathviz.core.types import (
    Cell, EMPTY, WALL, START, END, KINDS, VISITED, PATH, MARKS,
    Visited, PathStep,
)

# (drow, dcol) in enumeration order: up, down, left, right
_DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class GridModel:
    def __init__(self, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"grid dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.cells: List[List[str]] = [[EMPTY] * cols for _ in range(rows)]  # [row][col]
        self._start: Optional[Cell] = None
        self._end: Optional[Cell] = None
        self._marks: Dict[Cell, str] = {}

    # -------------------- queries --------------------

    @property
    def start(self) -> Optional[Cell]:
        return self._start

    @property
    def end(self) -> Optional[Cell]:
        return self._end

    @property
    def marks(self) -> Dict[Cell, str]:
        return dict(self._marks)

    def in_bounds(self, c: Cell) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def kind(self, c: Cell) -> str:
        self._check_bounds(c)
        r, col = c
        return self.cells[r][col]

    def is_wall(self, c: Cell) -> bool:
        return self.kind(c) == WALL

    def cells_iter(self) -> Iterator[Cell]:
        for r in range(self.rows):
            for col in range(self.cols):
                yield (r, col)

    def walls(self) -> Iterator[Cell]:
        return (c for c in self.cells_iter() if self.cells[c[0]][c[1]] == WALL)

    def neighbors(self, c: Cell) -> List[Cell]:
        """In-bounds orthogonal neighbors of c, walls included, in up/down/left/right order."""
        r, col = c
        out: List[Cell] = []
        for dr, dc in _DIRECTIONS:
            n = (r + dr, col + dc)
            if self.in_bounds(n):
                out.append(n)
        return out

    # -------------------- mutation --------------------

    def set_kind(self, c: Cell, kind: str) -> None:
        """Assign one cell's kind, keeping the single-start / single-end invariant."""
        if kind not in KINDS:
            raise InvalidSelection(f"unknown cell kind {kind!r}")
        if not self.in_bounds(c):
            raise InvalidSelection(f"cell {c} is outside the {self.rows}x{self.cols} grid")

        current = self.kind(c)
        if kind in (START, END) and current == WALL:
            raise InvalidSelection(f"cannot mark wall {c} as {kind}")
        if kind == WALL and current in (START, END):
            raise InvalidSelection(f"cannot draw a wall over the {current} cell {c}")

        # the cell loses whatever role it had
        if current == START:
            self._start = None
        elif current == END:
            self._end = None

        # the previous holder of the role loses it
        if kind == START and self._start is not None:
            self._put(self._start, EMPTY)
        elif kind == END and self._end is not None:
            self._put(self._end, EMPTY)

        self._put(c, kind)
        if kind == WALL:
            self._marks.pop(c, None)
        if kind == START:
            self._start = c
        elif kind == END:
            self._end = c

    def reset(self, preserve: Iterable[str] = ()) -> None:
        """Set every cell to empty except kinds listed in preserve. Marks are always cleared."""
        keep = set(preserve)
        unknown = keep - set(KINDS)
        if unknown:
            raise InvalidSelection(f"unknown cell kinds {sorted(unknown)}")
        for r, col in self.cells_iter():
            if self.cells[r][col] not in keep:
                self.cells[r][col] = EMPTY
        if START not in keep:
            self._start = None
        if END not in keep:
            self._end = None
        self._marks.clear()

    def clear(self) -> None:
        self.reset()

    def clear_path(self) -> None:
        self._marks.clear()

    def mark(self, c: Cell, mark: str) -> None:
        if mark not in MARKS:
            raise ValueError(f"unknown mark {mark!r}")
        self._check_bounds(c)
        self._marks[c] = mark

    def record(self, event) -> None:
        """Observer hook: turn Visited / PathStep events into marks."""
        if isinstance(event, Visited):
            if self._marks.get(event.cell) != PATH:
                self.mark(event.cell, VISITED)
        elif isinstance(event, PathStep):
            self.mark(event.cell, PATH)

    # -------------------- helpers --------------------

    def _put(self, c: Cell, kind: str) -> None:
        r, col = c
        self.cells[r][col] = kind

    def _check_bounds(self, c: Cell) -> None:
        if not self.in_bounds(c):
            raise IndexError(f"cell {c} is outside the {self.rows}x{self.cols} grid")

    def __repr__(self) -> str:
        return f"GridModel({self.rows}x{self.cols}, start={self._start}, end={self._end})"
