"""Line-clear cascade.

After a piece lands the board is scanned for full rows. Each batch of full
rows is shown as pending for a hold window, removed, and the board rescanned
after a short settle, because rows that shifted down can complete new lines.
Points from every pass are accumulated and handed back in one commit once a
scan comes up empty, so a two-row pass followed by a one-row pass scores
300 + 100 and never as a three-row clear.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional, Tuple

from .clock import ManualClock, ScheduledStep
from .grid import GameGrid
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class ClearPhase(Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    ANIMATING = "animating"
    CASCADING = "cascading"


class LineClearCascade:
    def __init__(
        self,
        clock: ManualClock,
        rules: ScoringRules,
        on_pending: Callable[[Tuple[int, ...]], None],
        on_pass: Callable[[GameGrid, int, int], None],
        on_complete: Callable[[int, int], None],
        hold_ms: float = 500.0,
        settle_ms: float = 50.0,
    ) -> None:
        self.clock = clock
        self.rules = rules
        self.on_pending = on_pending
        self.on_pass = on_pass
        self.on_complete = on_complete
        self.hold_ms = hold_ms
        self.settle_ms = settle_ms

        self.phase = ClearPhase.IDLE
        self.grid: Optional[GameGrid] = None
        self.pending_rows: Tuple[int, ...] = ()
        self.accumulated = 0
        self.rows_removed = 0
        self.passes = 0
        self._step: Optional[ScheduledStep] = None

    @property
    def active(self) -> bool:
        return self.phase is not ClearPhase.IDLE

    def begin(self, grid: GameGrid) -> None:
        """Start scanning `grid`. Completes synchronously when nothing is full."""
        self.cancel()
        self.grid = grid
        self._scan()

    def cancel(self) -> None:
        self.clock.cancel(self._step)
        self._step = None
        self.phase = ClearPhase.IDLE
        self.grid = None
        self.pending_rows = ()
        self.accumulated = 0
        self.rows_removed = 0
        self.passes = 0

    def _scan(self) -> None:
        self._step = None
        self.phase = ClearPhase.SCANNING
        rows = self.grid.full_rows()
        if not rows:
            points, removed = self.accumulated, self.rows_removed
            if self.passes:
                logger.debug("cascade finished after %d pass(es): %d rows, %d points",
                             self.passes, removed, points)
            self.phase = ClearPhase.IDLE
            self.grid = None
            self.accumulated = 0
            self.rows_removed = 0
            self.passes = 0
            self.on_complete(points, removed)
            return

        self.phase = ClearPhase.ANIMATING
        self.pending_rows = tuple(rows)
        self.on_pending(self.pending_rows)
        self._step = self.clock.call_later(self.hold_ms, self._collapse)

    def _collapse(self) -> None:
        self.phase = ClearPhase.CASCADING
        rows = self.pending_rows
        self.grid = self.grid.without_rows(rows)
        self.pending_rows = ()
        points = self.rules.score_for_lines(len(rows))
        self.accumulated += points
        self.rows_removed += len(rows)
        self.passes += 1
        logger.debug("cleared rows %s for %d points", list(rows), points)
        self.on_pass(self.grid, len(rows), points)
        self._step = self.clock.call_later(self.settle_ms, self._scan)
