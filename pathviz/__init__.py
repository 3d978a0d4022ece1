"""
pathviz: watch BFS, DFS, Dijkstra and A* explore a grid, one cell at a time.
"""

__version__ = "0.1.0"
