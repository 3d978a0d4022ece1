# pathviz/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Dict, Any

Cell = Tuple[int, int]  # (row, col)

# Cell kinds (mutually exclusive)
EMPTY = "empty"
WALL = "wall"
START = "start"
END = "end"
KINDS = (EMPTY, WALL, START, END)

# Renderer annotations, kept apart from kinds
VISITED = "visited"
PATH = "path"
MARKS = (VISITED, PATH)

# Run outcomes
FOUND = "found"
NOT_FOUND = "not_found"
INVALID_INPUT = "invalid_input"
CANCELLED = "cancelled"


@dataclass(frozen=True)
class Visited:
    cell: Cell


@dataclass(frozen=True)
class PathStep:
    cell: Cell


@dataclass(frozen=True)
class RunOutcome:
    outcome: str                  # FOUND | NOT_FOUND


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "found" | "exhausted"
    current: Optional[Cell] = None
    visited: bool = False         # False for the start cell and non-running steps
    opened: List[Cell] = field(default_factory=list)
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SearchResult:
    algo: str
    outcome: str
    visit_order: List[Cell] = field(default_factory=list)
    path: List[Cell] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.outcome == FOUND

    @property
    def path_len(self) -> int:
        """Number of moves along the path (0 when start == end or nothing found)."""
        return max(0, len(self.path) - 1)
