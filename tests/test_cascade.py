from typing import List

from falling_blocks.game import ClearPhase, GameGrid, LineClearCascade, ManualClock, ScoringRules


class ScriptedGrid(GameGrid):
    """Grid whose successive scans report a fixed sequence of full rows."""

    def __init__(self, scans: List[List[int]]) -> None:
        super().__init__(10, 20)
        self.scans = list(scans)

    def full_rows(self):
        return self.scans.pop(0) if self.scans else []

    def without_rows(self, rows):
        return self


def make_cascade(clock):
    log = {"pending": [], "passes": [], "complete": []}
    cascade = LineClearCascade(
        clock,
        ScoringRules(),
        on_pending=lambda rows: log["pending"].append(rows),
        on_pass=lambda grid, count, points: log["passes"].append((count, points)),
        on_complete=lambda points, rows: log["complete"].append((points, rows)),
    )
    return cascade, log


def test_no_full_rows_completes_immediately_with_zero():
    clock = ManualClock()
    cascade, log = make_cascade(clock)
    cascade.begin(GameGrid(10, 20))
    assert log["complete"] == [(0, 0)]
    assert log["pending"] == []
    assert not cascade.active


def test_single_pass_holds_then_removes():
    clock = ManualClock()
    cascade, log = make_cascade(clock)
    grid = GameGrid(10, 20)
    grid.grid[18:20, :] = 1
    cascade.begin(grid)
    assert cascade.phase is ClearPhase.ANIMATING
    assert log["pending"] == [(18, 19)]
    clock.advance(499)
    assert log["passes"] == []
    clock.advance(1)
    assert cascade.phase is ClearPhase.CASCADING
    assert log["passes"] == [(2, 300)]
    assert log["complete"] == []
    clock.advance(50)
    assert log["complete"] == [(300, 2)]
    assert cascade.phase is ClearPhase.IDLE


def test_chained_passes_accumulate_into_one_commit():
    clock = ManualClock()
    cascade, log = make_cascade(clock)
    cascade.begin(ScriptedGrid([[18, 19], [19]]))
    clock.advance(550)
    assert log["passes"] == [(2, 300)]
    assert log["complete"] == []
    clock.advance(550)
    assert log["passes"] == [(2, 300), (1, 100)]
    assert log["complete"] == [(400, 3)]


def test_cancel_drops_pending_work():
    clock = ManualClock()
    cascade, log = make_cascade(clock)
    grid = GameGrid(10, 20)
    grid.grid[19, :] = 1
    cascade.begin(grid)
    cascade.cancel()
    clock.advance(10_000)
    assert log["passes"] == []
    assert log["complete"] == []
    assert cascade.accumulated == 0
    assert not cascade.active
