"""
Configuration for pathviz.

Defaults live here as module constants. load_settings() resolves each value from,
in order: a --key=value command-line flag, a PATHVIZ_* environment variable, the default.
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from pathviz.core.errors import ConfigError
from pathviz.core.search import canonical_name

# =============================================================================
# Grid
# =============================================================================

ROWS = 20
COLS = 20

# Chance that each cell becomes a wall when generating a random maze
WALL_PROBABILITY = 0.3

# =============================================================================
# Run
# =============================================================================

# Pause between visualization steps (milliseconds)
DELAY_MS = 50

# Bounds used by the viewer's speed controls
DELAY_MS_MIN = 0
DELAY_MS_MAX = 1000
DELAY_MS_STEP = 10

DEFAULT_ALGORITHM = "bfs"

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

ENV_PREFIX = "PATHVIZ_"


@dataclass(frozen=True)
class Settings:
    rows: int = ROWS
    cols: int = COLS
    delay_ms: int = DELAY_MS
    wall_probability: float = WALL_PROBABILITY
    algorithm: str = DEFAULT_ALGORITHM
    log_level: str = LOG_LEVEL


def _raw_value(key: str, argv: Sequence[str], environ: Mapping[str, str]) -> Optional[str]:
    flag = f"--{key.replace('_', '-')}="
    value = None
    for arg in argv:
        if arg.startswith(flag):
            value = arg.split("=", 1)[1]
    if value is not None:
        return value
    return environ.get(ENV_PREFIX + key.upper())


def _parse(key: str, raw: str, kind):
    try:
        return kind(raw)
    except ValueError:
        raise ConfigError(f"{key}: cannot parse {raw!r} as {kind.__name__}") from None


def load_settings(argv: Optional[Sequence[str]] = None,
                  environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Resolve Settings from argv flags, then PATHVIZ_* env vars, then defaults."""
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ

    values = {}
    for key, kind in (("rows", int), ("cols", int), ("delay_ms", int),
                      ("wall_probability", float), ("algorithm", str), ("log_level", str)):
        raw = _raw_value(key, argv, environ)
        if raw is not None:
            values[key] = _parse(key, raw, kind)

    settings = Settings(**values)

    if settings.rows <= 0 or settings.cols <= 0:
        raise ConfigError(f"grid dimensions must be positive, got {settings.rows}x{settings.cols}")
    if settings.delay_ms < 0:
        raise ConfigError(f"delay_ms must be >= 0, got {settings.delay_ms}")
    if not 0.0 <= settings.wall_probability <= 1.0:
        raise ConfigError(f"wall_probability must be within [0, 1], got {settings.wall_probability}")
    try:
        algorithm = canonical_name(settings.algorithm)
    except ValueError as ex:
        raise ConfigError(str(ex)) from None
    log_level = settings.log_level.strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"log_level: unknown level {settings.log_level!r}")

    return Settings(
        rows=settings.rows,
        cols=settings.cols,
        delay_ms=settings.delay_ms,
        wall_probability=settings.wall_probability,
        algorithm=algorithm,
        log_level=log_level,
    )
