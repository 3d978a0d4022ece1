# pathviz/app/editor.py
"""
GridEditor: turns user gestures into GridModel changes.

- click(cell): alternately places the start and the end (walls are ignored)
- toggle_wall(cell): wall <-> empty; refuses the start/end cells
- generate_maze(): clears everything, then scatters walls at random
- clear() / clear_path(): whole grid vs. visited/path marks only
"""

import logging
import random
from typing import Optional

from pathviz.config import WALL_PROBABILITY
from pathviz.core.grid import GridModel
from pathviz.core.types import Cell, EMPTY, WALL, START, END

logger = logging.getLogger(__name__)


class GridEditor:
    def __init__(self, grid: GridModel):
        self.grid = grid
        self.selecting_start = True

    def click(self, cell: Cell) -> bool:
        """Place the start or the end, alternating. Returns False if the click was ignored."""
        if not self.grid.in_bounds(cell) or self.grid.is_wall(cell):
            return False
        if self.selecting_start:
            self.grid.set_kind(cell, START)
        else:
            self.grid.set_kind(cell, END)
        self.selecting_start = not self.selecting_start
        return True

    def toggle_wall(self, cell: Cell) -> str:
        """Flip a cell between wall and empty. Raises InvalidSelection on start/end."""
        new_kind = EMPTY if self.grid.is_wall(cell) else WALL
        self.grid.set_kind(cell, new_kind)
        return new_kind

    def generate_maze(self, probability: float = WALL_PROBABILITY,
                      rng: Optional[random.Random] = None) -> int:
        """Clear the grid, then make each cell a wall with the given probability."""
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"probability must be within [0, 1], got {probability}")
        rng = rng or random.Random()
        self.clear()
        count = 0
        for cell in self.grid.cells_iter():
            if rng.random() < probability:
                self.grid.set_kind(cell, WALL)
                count += 1
        logger.info(f"Generated maze: {count} walls on {self.grid.rows}x{self.grid.cols} "
                    f"(p={probability})")
        return count

    def clear(self) -> None:
        self.grid.clear()
        self.selecting_start = True

    def clear_path(self) -> None:
        self.grid.clear_path()
