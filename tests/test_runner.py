"""
Unit tests for AlgorithmRunner (asyncio, driven with asyncio.run and a fake sleep).
"""

import asyncio

import pytest

from pathviz.core.grid import GridModel
from pathviz.core.runner import AlgorithmRunner
from pathviz.core.types import (
    START, END, Visited, PathStep, RunOutcome,
    FOUND, NOT_FOUND, INVALID_INPUT, CANCELLED,
)


class Recorder:
    """Observer collecting events plus a fake sleep collecting delays."""

    def __init__(self):
        self.events = []
        self.delays = []

    def __call__(self, event):
        self.events.append(event)

    async def sleep(self, seconds):
        self.delays.append(seconds)
        await asyncio.sleep(0)


def make_runner(grid, rec, delay_ms=50):
    return AlgorithmRunner(grid, observer=rec, delay_ms=delay_ms, sleep=rec.sleep)


class TestVisualize:
    """Outcomes and event sequences."""

    def test_found_event_sequence(self, open_grid):
        """Visited events, then PathStep events end -> start, then RunOutcome(FOUND)."""
        rec = Recorder()
        outcome = asyncio.run(make_runner(open_grid, rec).visualize("bfs"))
        assert outcome == FOUND
        visited = [(1, 0), (0, 1), (2, 0), (1, 1), (0, 2), (2, 1), (1, 2)]
        assert rec.events == (
            [Visited(c) for c in visited]
            + [PathStep(c) for c in [(2, 1), (2, 0), (1, 0)]]
            + [RunOutcome(FOUND)]
        )

    def test_one_pause_per_pop_and_path_step(self, open_grid):
        """Pauses follow each popped non-goal cell (start included) and each PathStep."""
        rec = Recorder()
        asyncio.run(make_runner(open_grid, rec, delay_ms=50).visualize("bfs"))
        # 8 non-goal pops + 3 path steps
        assert rec.delays == [0.05] * 11

    def test_not_found(self, walled_off_grid, algorithms):
        """A boxed-in end reports NOT_FOUND and emits no PathStep."""
        for name in algorithms:
            rec = Recorder()
            outcome = asyncio.run(make_runner(walled_off_grid, rec).visualize(name))
            assert outcome == NOT_FOUND
            assert rec.events[-1] == RunOutcome(NOT_FOUND)
            assert not any(isinstance(e, PathStep) for e in rec.events)

    def test_start_equals_end(self):
        """start == end is found immediately with no visited or path events."""
        rec = Recorder()
        outcome = asyncio.run(make_runner(GridModel(3, 3), rec).visualize("astar", (1, 1), (1, 1)))
        assert outcome == FOUND
        assert rec.events == [RunOutcome(FOUND)]
        assert rec.delays == []

    def test_missing_endpoints_is_invalid_input(self):
        """Without both endpoints nothing runs and nothing is emitted."""
        grid = GridModel(3, 3)
        grid.set_kind((0, 0), START)
        rec = Recorder()
        runner = make_runner(grid, rec)
        assert asyncio.run(runner.visualize("bfs")) == INVALID_INPUT
        assert rec.events == []
        assert not runner.running

    def test_unknown_algorithm_is_invalid_input(self, open_grid):
        """An unknown algorithm name is reported, not raised."""
        rec = Recorder()
        assert asyncio.run(make_runner(open_grid, rec).visualize("greedy")) == INVALID_INPUT
        assert rec.events == []

    def test_wall_endpoint_is_invalid_input(self):
        """Explicit endpoints on walls are rejected at the run boundary."""
        grid = GridModel(3, 3)
        grid.set_kind((1, 1), "wall")
        rec = Recorder()
        assert asyncio.run(make_runner(grid, rec).visualize("dfs", (0, 0), (1, 1))) == INVALID_INPUT

    def test_grid_as_observer(self, open_grid):
        """GridModel.record turns the event stream into marks."""
        runner = AlgorithmRunner(open_grid, observer=open_grid.record, delay_ms=0,
                                 sleep=Recorder().sleep)
        asyncio.run(runner.visualize("bfs"))
        marks = open_grid.marks
        assert {c for c, m in marks.items() if m == "path"} == {(2, 1), (2, 0), (1, 0)}
        assert sum(1 for m in marks.values() if m == "visited") == 4
        assert (0, 0) not in marks and (2, 2) not in marks
        assert runner.last_metrics["path_len"] == 4

    def test_negative_delay_rejected(self, open_grid):
        """Delays cannot be negative."""
        with pytest.raises(ValueError):
            AlgorithmRunner(open_grid, delay_ms=-1)


class TestCancellation:
    """Cooperative cancellation and superseding runs."""

    def test_cancel_stops_emission(self):
        """No events are emitted once cancel() has been called."""
        grid = GridModel(8, 8)
        grid.set_kind((0, 0), START)
        grid.set_kind((7, 7), END)
        rec = Recorder()
        runner = make_runner(grid, rec)

        def observer(event):
            rec(event)
            if len(rec.events) == 3:
                runner.cancel()

        runner.observer = observer
        outcome = asyncio.run(runner.visualize("bfs"))
        assert outcome == CANCELLED
        assert len(rec.events) == 3
        assert not runner.running

    def test_cancel_from_outside(self):
        """cancel() from another task ends the run at its next pause."""
        grid = GridModel(8, 8)
        grid.set_kind((0, 0), START)
        grid.set_kind((7, 7), END)
        rec = Recorder()
        runner = make_runner(grid, rec)

        async def scenario():
            task = asyncio.ensure_future(runner.visualize("dfs"))
            for _ in range(5):
                await asyncio.sleep(0)
            assert runner.running
            runner.cancel()
            count = len(rec.events)
            outcome = await task
            return outcome, count

        outcome, count = asyncio.run(scenario())
        assert outcome == CANCELLED
        assert len(rec.events) == count
        assert RunOutcome(FOUND) not in rec.events

    def test_new_run_supersedes_active(self):
        """A second visualize() cancels the first and waits for it before starting."""
        grid = GridModel(8, 8)
        grid.set_kind((0, 0), START)
        grid.set_kind((7, 7), END)
        rec = Recorder()
        runner = make_runner(grid, rec)

        async def scenario():
            first = asyncio.ensure_future(runner.visualize("bfs"))
            for _ in range(5):
                await asyncio.sleep(0)
            second = await runner.visualize("astar")
            return await first, second

        first, second = asyncio.run(scenario())
        assert first == CANCELLED
        assert second == FOUND
        assert rec.events[-1] == RunOutcome(FOUND)
        assert rec.events.count(RunOutcome(FOUND)) == 1

    def test_stop_waits_for_completion(self):
        """stop() returns only after the active run has finished."""
        grid = GridModel(6, 6)
        grid.set_kind((0, 0), START)
        grid.set_kind((5, 5), END)
        rec = Recorder()
        runner = make_runner(grid, rec)

        async def scenario():
            task = asyncio.ensure_future(runner.visualize("dijkstra"))
            await asyncio.sleep(0)
            await runner.stop()
            return runner.running, task.done(), await task

        running, done, outcome = asyncio.run(scenario())
        assert running is False
        assert done is True
        assert outcome == CANCELLED

    def test_stop_without_run_is_noop(self, open_grid):
        """stop() with nothing active returns at once."""
        runner = AlgorithmRunner(open_grid)
        asyncio.run(runner.stop())
        assert not runner.running
