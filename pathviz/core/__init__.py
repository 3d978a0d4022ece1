"""
Grid-search engine.

- GridModel: cell kinds, marks, neighbor lookup
- GridSearch and its four algorithms: step-wise searches
- reconstruct_path / path_steps: walk the predecessor map back from the end
- AlgorithmRunner (pathviz.core.runner): paced asynchronous driver
"""

from pathviz.core.errors import (
    ConfigError,
    InvalidSelection,
    MissingEndpoints,
    PathvizError,
    ReconstructionMisuse,
    UnknownAlgorithm,
)
from pathviz.core.grid import GridModel
from pathviz.core.path import path_steps, reconstruct_path
from pathviz.core.search import ALGORITHMS, make_algorithm, manhattan, solve

__all__ = [
    "ALGORITHMS",
    "ConfigError",
    "GridModel",
    "InvalidSelection",
    "MissingEndpoints",
    "PathvizError",
    "ReconstructionMisuse",
    "UnknownAlgorithm",
    "make_algorithm",
    "manhattan",
    "path_steps",
    "reconstruct_path",
    "solve",
]
