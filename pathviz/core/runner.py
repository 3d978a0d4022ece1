# pathviz/core/runner.py
"""
AlgorithmRunner: drives one search to completion with pacing.

Single-threaded asyncio. The only suspension points are the pacing sleeps:
one after every popped non-goal cell and one after every PathStep. At most one
run is active; a new visualize() cancels and awaits the previous run first.
Cancellation is cooperative and takes effect when the pending sleep returns,
so nothing is emitted after cancel().
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from pathviz.config import DELAY_MS
from pathviz.core.errors import PathvizError
from pathviz.core.grid import GridModel
from pathviz.core.path import path_steps
from pathviz.core.search import make_algorithm
from pathviz.core.types import (
    Cell, Visited, PathStep, RunOutcome, FOUND, NOT_FOUND, INVALID_INPUT, CANCELLED,
)

logger = logging.getLogger(__name__)

Observer = Callable[[object], None]


class AlgorithmRunner:
    def __init__(
        self,
        grid: GridModel,
        observer: Optional[Observer] = None,
        delay_ms: float = DELAY_MS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        self.grid = grid
        self.observer = observer
        self.delay_ms = delay_ms
        self._sleep = sleep
        self._generation = 0
        self._active: Optional[asyncio.Event] = None
        self.last_metrics: dict = {}

    @property
    def running(self) -> bool:
        return self._active is not None

    def cancel(self) -> None:
        """Abandon the active run (if any). It returns CANCELLED at its next pause."""
        if self._active is not None:
            logger.info("Cancelling active run")
        self._generation += 1

    async def stop(self) -> None:
        """Cancel the active run and wait until it has finished."""
        while self._active is not None:
            self.cancel()
            await self._active.wait()

    async def visualize(self, algorithm: str, start: Optional[Cell] = None,
                        end: Optional[Cell] = None) -> str:
        """
        Run `algorithm` on the grid, emitting Visited / PathStep / RunOutcome events.

        Returns FOUND, NOT_FOUND, INVALID_INPUT (nothing emitted) or CANCELLED.
        """
        if self._active is not None:
            logger.info("New run requested; superseding the active one")
            await self.stop()

        try:
            algo = make_algorithm(algorithm)
            algo.init(self.grid, start, end)
        except PathvizError as ex:
            logger.warning(f"Run rejected: {ex}")
            return INVALID_INPUT

        done = asyncio.Event()
        self._active = done
        token = self._generation
        logger.info(f"Starting {algo.name}: {algo.start} -> {algo.end}")
        try:
            outcome = await self._drive(algo, token)
        finally:
            self._active = None
            done.set()
        logger.info(f"{algo.name} finished: {outcome} "
                    f"(popped={self.last_metrics.get('popped', 0)}, "
                    f"path_len={self.last_metrics.get('path_len', 0)})")
        return outcome

    # -------------------- internals --------------------

    async def _drive(self, algo, token: int) -> str:
        for res in algo.steps():
            self.last_metrics = res.metrics
            if res.status == "found":
                break
            if res.status == "exhausted":
                self._emit(RunOutcome(NOT_FOUND))
                return NOT_FOUND
            if res.visited:
                self._emit(Visited(res.current))
            if not await self._pause(token):
                return CANCELLED

        for c in path_steps(algo.parent, algo.start, algo.end):
            self._emit(PathStep(c))
            if not await self._pause(token):
                return CANCELLED

        self._emit(RunOutcome(FOUND))
        return FOUND

    async def _pause(self, token: int) -> bool:
        """Sleep for the pacing delay; False if the run was cancelled meanwhile."""
        if token != self._generation:
            return False
        await self._sleep(self.delay_ms / 1000.0)
        return token == self._generation

    def _emit(self, event) -> None:
        logger.debug(f"event {event}")
        if self.observer is not None:
            self.observer(event)
