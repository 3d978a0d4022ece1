"""
Pytest configuration and shared fixtures.
"""

import pytest

from pathviz.core.grid import GridModel
from pathviz.core.types import START, END, WALL


@pytest.fixture
def open_grid() -> GridModel:
    """3x3 grid, no walls, start=(0, 0), end=(2, 2)."""
    grid = GridModel(3, 3)
    grid.set_kind((0, 0), START)
    grid.set_kind((2, 2), END)
    return grid


@pytest.fixture
def walled_off_grid() -> GridModel:
    """5x5 grid whose end (2, 2) is boxed in by four walls."""
    grid = GridModel(5, 5)
    grid.set_kind((0, 0), START)
    grid.set_kind((2, 2), END)
    for cell in [(1, 2), (3, 2), (2, 1), (2, 3)]:
        grid.set_kind(cell, WALL)
    return grid


@pytest.fixture
def algorithms() -> list[str]:
    """Registry names of all four searches."""
    return ["bfs", "dfs", "dijkstra", "astar"]
