# pathviz/core/errors.py
"""
Error taxonomy for the grid-search engine.

"No path" is not here: an exhausted frontier is a normal outcome
(NOT_FOUND), reported through RunOutcome rather than raised.
"""


class PathvizError(Exception):
    """Base class for every error raised by pathviz."""


class InvalidSelection(PathvizError):
    """A cell assignment that would break the grid invariants. Grid is left unchanged."""


class MissingEndpoints(PathvizError):
    """A run was requested without both a start and an end cell."""


class ReconstructionMisuse(PathvizError):
    """Path reconstruction was asked for without a successful search behind it."""


class UnknownAlgorithm(PathvizError, ValueError):
    pass


class ConfigError(PathvizError, ValueError):
    pass
